from ._sentinel import SingletonType, Undefined, UndefinedType, is_sentinel

__all__ = (
    "Undefined",
    "SingletonType",
    "UndefinedType",
    "is_sentinel",
)
