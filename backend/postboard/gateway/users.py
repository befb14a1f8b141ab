"""Gateway for the `users` table."""

from postboard.gateway.base import Gateway
from postboard.models.user import User


class UserGateway(Gateway[User]):
    model = User
