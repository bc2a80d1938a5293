DEFAULT_BASE_PATH = "./"
MAX_LINE_LENGTH = 4096
MAX_INCLUDE_DEPTH = 32
MAX_DEFINES = 256
MAX_OUTPUT_SIZE = 1024 * 1024
MAX_VIRTUAL_PATHS = 32
MAX_CONDITIONAL_DEPTH = 63


class Config:
    """Options for a single preprocessing run. Instances are read-only."""

    __slots__ = ["base_path", "remove_comments", "preserve_lines",
                 "max_include_depth", "max_output_size", "max_line_length",
                 "max_defines", "defines"]

    def __init__(self, base_path=DEFAULT_BASE_PATH, remove_comments=True,
                 preserve_lines=False, max_include_depth=MAX_INCLUDE_DEPTH,
                 max_output_size=MAX_OUTPUT_SIZE,
                 max_line_length=MAX_LINE_LENGTH, max_defines=MAX_DEFINES,
                 defines=None):
        for name, value in (("max_include_depth", max_include_depth),
                            ("max_output_size", max_output_size),
                            ("max_line_length", max_line_length),
                            ("max_defines", max_defines)):
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
        if defines is not None and len(defines) > max_defines:
            raise ValueError(
                f"{len(defines)} predefined macros exceed max_defines "
                f"({max_defines})"
            )
        set_ = object.__setattr__
        set_(self, "base_path", base_path)
        set_(self, "remove_comments", bool(remove_comments))
        set_(self, "preserve_lines", bool(preserve_lines))
        set_(self, "max_include_depth", max_include_depth)
        set_(self, "max_output_size", max_output_size)
        set_(self, "max_line_length", max_line_length)
        set_(self, "max_defines", max_defines)
        set_(self, "defines", dict(defines or {}))

    def __setattr__(self, name, value):
        raise AttributeError(f"Config is read-only, cannot set {name}")

    def replace(self, **overrides):
        values = {name: getattr(self, name) for name in self.__slots__}
        values.update(overrides)
        return Config(**values)

    def __eq__(self, other):
        if not isinstance(other, Config):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name)
                   for name in self.__slots__)

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)!r}"
                           for name in self.__slots__)
        return f"Config({fields})"


def default_config():
    return Config()
