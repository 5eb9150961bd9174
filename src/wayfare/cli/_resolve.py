"""App import resolution — resolves ``"module:attribute"`` strings to App instances."""

import importlib

from wayfare.app import App


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a wayfare App instance.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"app"``. A callable that is not an App is treated as
    a zero-argument factory and called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an ``App``.
        ValueError: If the import string has no module path.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not module_path:
        msg = f"{import_string!r} has no module path; expected 'module:attribute'"
        raise ValueError(msg)
    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name or "app")

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a wayfare.App instance"
        raise TypeError(msg)

    return obj
