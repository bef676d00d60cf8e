"""Platform emitters — one class per deployment target.

Select an emitter by platform name::

    emitter = get_emitter(RoutingConfig(platform="vercel"))
    document = emitter.emit(resolved_routes)
"""

from perch.config import RoutingConfig
from perch.emitters.netlify import NetlifyEmitter
from perch.emitters.protocol import Document, RouteEmitter
from perch.emitters.vercel import VercelEmitter
from perch.errors import ConfigurationError

EMITTERS: dict[str, type[VercelEmitter] | type[NetlifyEmitter]] = {
    VercelEmitter.name: VercelEmitter,
    NetlifyEmitter.name: NetlifyEmitter,
}

__all__ = ["EMITTERS", "Document", "NetlifyEmitter", "RouteEmitter", "VercelEmitter", "get_emitter"]


def get_emitter(config: RoutingConfig | None = None) -> RouteEmitter:
    """Return the emitter for ``config.platform``.

    Raises ``ConfigurationError`` for an unknown platform.
    """
    config = config or RoutingConfig()
    emitter_cls = EMITTERS.get(config.platform.lower())
    if emitter_cls is None:
        available = ", ".join(sorted(EMITTERS))
        msg = f"Unknown platform {config.platform!r}. Available: {available}"
        raise ConfigurationError(msg)
    return emitter_cls(config)
