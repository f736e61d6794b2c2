"""Roost — static resource handlers for ASGI apps.

Register URL patterns, the locations behind them and a cache policy,
then serve them through an ``async (request, next)`` middleware pipeline.

Basic usage::

    from roost import DefaultResourceLoader, ResourceApp

    app = ResourceApp(resource_loader=DefaultResourceLoader(package="myapp"))
    app.resources.add_resource_handler("/resources/**").add_resource_locations(
        "/public/", "classpath:/static/"
    ).set_cache_period(3600)

    app.run()

Serving the app needs the ``server`` extra (``pip install roost[server]``).
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DefaultResourceLoader",
    "HTTPError",
    "IncompleteRegistrationError",
    "InvalidRegistrationError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "PathResourceResolver",
    "Request",
    "Resource",
    "ResourceApp",
    "ResourceConfig",
    "ResourceHandlerRegistration",
    "ResourceHandlerRegistry",
    "ResourceLoader",
    "ResourceMiddleware",
    "ResourceRequestHandler",
    "ResourceResolver",
    "ResourceTransformer",
    "Response",
    "RoostError",
    "TransformedResource",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "ResourceApp":
        from roost.app import ResourceApp

        return ResourceApp

    if name == "ResourceConfig":
        from roost.config import ResourceConfig

        return ResourceConfig

    if name == "Request":
        from roost.http.request import Request

        return Request

    if name == "Response":
        from roost.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from roost.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "ResourceMiddleware":
        from roost.middleware.resources import ResourceMiddleware

        return ResourceMiddleware

    if name == "ResourceHandlerRegistration":
        from roost.resources.registration import ResourceHandlerRegistration

        return ResourceHandlerRegistration

    if name == "ResourceHandlerRegistry":
        from roost.resources.registry import ResourceHandlerRegistry

        return ResourceHandlerRegistry

    if name == "ResourceRequestHandler":
        from roost.resources.handler import ResourceRequestHandler

        return ResourceRequestHandler

    if name in ("DefaultResourceLoader", "ResourceLoader"):
        from roost.resources import loader as _loader

        return getattr(_loader, name)

    if name in ("Resource", "TransformedResource"):
        from roost.resources import resource as _resource

        return getattr(_resource, name)

    if name in ("PathResourceResolver", "ResourceResolver"):
        from roost.resources import resolvers as _resolvers

        return getattr(_resolvers, name)

    if name == "ResourceTransformer":
        from roost.resources.transformers import ResourceTransformer

        return ResourceTransformer

    if name in (
        "ConfigurationError",
        "HTTPError",
        "IncompleteRegistrationError",
        "InvalidRegistrationError",
        "MethodNotAllowed",
        "NotFound",
        "RoostError",
    ):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
