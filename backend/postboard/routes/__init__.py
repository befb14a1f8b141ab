"""
Postboard Backend — API Routes Package
========================================

What:  HTTP route handlers binding verbs and paths to service operations.

Route Inventory:
    - health.py:  GET /                      (public greeting, enveloped)
                  GET /health                (public, raw health body)
    - users.py:   POST/GET /users, GET/PATCH/DELETE /users/{user_id}
    - posts.py:   POST/GET /posts, GET /posts/with-tags,
                  GET/PATCH/DELETE /posts/{post_id}

Every router is built with `route_class=PipelineRoute`: bearer auth and the
response envelope are on unless the endpoint's `@route_options` (or the
passthrough path list) says otherwise. Handlers hold no business logic.
"""
