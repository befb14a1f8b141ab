"""Pydantic request validators and response models."""
