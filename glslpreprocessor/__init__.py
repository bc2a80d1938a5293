from glslpreprocessor import exceptions
from glslpreprocessor.config import Config, default_config
from glslpreprocessor.core import Preprocessor
from glslpreprocessor.filesystem import FileReader
from glslpreprocessor.result import Diagnostic, Result
from glslpreprocessor.virtual_paths import (VirtualPathRegistry,
                                            add_virtual_include_path,
                                            clear_virtual_include_paths,
                                            remove_virtual_include_path)

__all__ = [
    "Config", "default_config", "Diagnostic", "Result", "Preprocessor",
    "VirtualPathRegistry", "add_virtual_include_path",
    "remove_virtual_include_path", "clear_virtual_include_paths",
    "preprocess", "preprocess_file",
]


def _as_config(config):
    if config is None:
        return Config()
    if isinstance(config, Config):
        return config
    return Config(base_path=config)


def preprocess(source, filename="<memory>", config=None,
               virtual_paths=None, reader=None):
    """
    Preprocess shader source held in memory.

    config is a Config, or a plain string taken as the base path for
    includes. virtual_paths defaults to the process-wide registry.
    Returns a Result; preprocessing errors never raise.
    """
    preprocessor = Preprocessor(config=_as_config(config),
                                virtual_paths=virtual_paths, reader=reader)
    return preprocessor.preprocess(source, filename)


def preprocess_file(path, config=None, virtual_paths=None, reader=None):
    """Read path and preprocess it; see preprocess() for the options."""
    if reader is None:
        reader = FileReader()
    source = reader.read(path)
    if source is None:
        return Result.failed(Diagnostic(f"Failed to read file: {path}", 0,
                                        path, exceptions.IncludeError))
    return preprocess(source, path, config=config,
                      virtual_paths=virtual_paths, reader=reader)
