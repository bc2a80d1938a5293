import os
import cProfile

import pytest

from glslpreprocessor import VirtualPathRegistry
from glslpreprocessor.filesystem import FakeReader
from glslpreprocessor.virtual_paths import default_registry


@pytest.fixture(scope="session", autouse=True)
def maybe_profile():
    if os.environ.get("PROFILE"):
        profiler = cProfile.Profile()
        profiler.enable()
        yield  # run all tests
        profiler.disable()
        profiler.dump_stats("profile.stats")
    else:
        yield


@pytest.fixture(autouse=True)
def clean_default_registry():
    yield
    default_registry.clear()


@pytest.fixture
def registry():
    return VirtualPathRegistry()


@pytest.fixture
def reader():
    return FakeReader()
