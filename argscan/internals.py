from contextlib import contextmanager


class StorageGuard:
    """
    internal base of the registry value types (NamedOption, PositionalSlot).

    registration data lives under backing names prefixed with '-' (e.g. '-short'),
    which are not identifiers and therefore only reachable through setattr/view().

    rules
    - backing fields can be written only inside the build block of __new__:
        with super().__new__(cls) as self:
            setattr(self, "-short", short)
    - once the block exits they are locked; reading them directly is refused,
      public access goes through view() properties.
    """
    __slots__ = ("__building", "__dict__")

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        self.__building = True
        try:
            yield self
        finally:
            self.__building = False

    def __getattribute__(self, name, /):
        if name.startswith("-"):
            raise AttributeError("registration field %r is only readable through its property" % name[1:])
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if name.startswith("-") and not self.__building:
            raise AttributeError("registration field %r is read-only after registration" % name[1:])
        return object.__setattr__(self, name, value)


def view(name):
    """
    internal: read-only property over the '-<name>' backing field.

    registration fields are strings, booleans, enum members and callables, all
    handed out as stored.
    """

    def getter(self):
        return object.__getattribute__(self, "-" + name)

    getter.__qualname__ = getter.__name__ = name
    return property(getter)


__all__ = (
    "StorageGuard",
    "view",
)
