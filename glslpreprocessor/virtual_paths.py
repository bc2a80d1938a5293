"""
Namespace aliases for angle-bracket includes.

``#include <Engine/lighting.glsl>`` looks up ``Engine`` here and, when it
is registered, reads ``<real directory>/lighting.glsl`` instead of going
through the base path.

Pass a VirtualPathRegistry to each preprocessing call to keep aliases
local to the caller. The module-level functions operate on a shared
default registry that lives for the whole process; every registry
serializes its own reads and writes with a lock, so the shared one may be
mutated while other threads are preprocessing.
"""
import logging
import threading

from glslpreprocessor import exceptions
from glslpreprocessor.config import MAX_VIRTUAL_PATHS

logger = logging.getLogger(__name__)


class VirtualPathRegistry:

    def __init__(self, paths=None, capacity=MAX_VIRTUAL_PATHS):
        self.capacity = capacity
        self._paths = {}
        self._lock = threading.RLock()
        for name, real_path in (paths or {}).items():
            self.add(name, real_path)

    def add(self, name, real_path):
        """Register name, or point an existing name at real_path."""
        if not name or "/" in name:
            raise ValueError(f"Invalid virtual path name: {name!r}")
        with self._lock:
            if name not in self._paths and len(self._paths) >= self.capacity:
                raise exceptions.RegistryFull(
                    f"Too many virtual include paths (limit {self.capacity})"
                )
            logger.debug("Virtual path %s -> %s", name, real_path)
            self._paths[name] = real_path

    def remove(self, name):
        with self._lock:
            if self._paths.pop(name, None) is not None:
                logger.debug("Removed virtual path %s", name)

    def clear(self):
        with self._lock:
            self._paths.clear()

    def resolve(self, include_name):
        """
        Map an include name onto a registered directory.

        Returns None when the name has no ``/`` or its first segment is not
        registered.
        """
        namespace, slash, _ = include_name.partition("/")
        if not slash:
            return None
        with self._lock:
            real_path = self._paths.get(namespace)
        if real_path is None:
            return None
        return real_path + include_name[len(namespace):]

    def items(self):
        with self._lock:
            return list(self._paths.items())

    def __contains__(self, name):
        with self._lock:
            return name in self._paths

    def __len__(self):
        with self._lock:
            return len(self._paths)


default_registry = VirtualPathRegistry()


def add_virtual_include_path(name, real_path):
    default_registry.add(name, real_path)


def remove_virtual_include_path(name):
    default_registry.remove(name)


def clear_virtual_include_paths():
    default_registry.clear()
