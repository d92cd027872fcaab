"""safe-router — typed routes for file-routing web projects.

Scans a project organized under a file-routing convention (React Router
route config, Next.js app router, Next.js pages router) and generates a
TypeScript declaration file describing every route and its parameters.

Quick start::

    import safe_router

    safe_router.generate("my-app/", project_type="next-app")

Watch mode::

    async for outcome in safe_router.watch("my-app/", project_type="next-app"):
        print(outcome.status, outcome.route_count)

"""

__version__ = "0.1.0"
__all__ = [
    "GeneratorConfig",
    "SafeRouterError",
    "__version__",
    "generate",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import safe_router`` fast while providing a clean top-level API.
    """
    if name == "GeneratorConfig":
        from safe_router.config import GeneratorConfig

        return GeneratorConfig

    if name == "SafeRouterError":
        from safe_router._errors import SafeRouterError

        return SafeRouterError

    if name == "generate":
        from safe_router.app import generate

        return generate

    if name == "watch":
        from safe_router.app import watch

        return watch

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
