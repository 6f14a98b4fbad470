# app/core/context.py

import contextvars

DEFAULT_ACTOR = "system"

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
actor_ctx = contextvars.ContextVar("actor", default=DEFAULT_ACTOR)
