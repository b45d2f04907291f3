import textwrap

import pytest

from genum.core.config import config
from genum.core.engine.go_syntax import GoSyntaxBuilder
from genum.models.syntax import Package


@pytest.fixture(autouse=True)
def reset_config():
    config.reset()
    yield
    config.reset()


@pytest.fixture(scope="session")
def builder():
    return GoSyntaxBuilder()


@pytest.fixture
def make_package(builder):
    """Build an in-memory package from ``{file name: source}``."""

    def _make(files, name="colors", directory="/src/colors"):
        parsed = [
            builder.build(f"{directory}/{file_name}", textwrap.dedent(code))
            for file_name, code in files.items()
        ]
        return Package(name=name, directory=directory, files=parsed)

    return _make


@pytest.fixture
def go_dir(tmp_path):
    """Write ``{file name: source}`` into a temporary package directory."""

    def _write(files):
        for file_name, code in files.items():
            (tmp_path / file_name).write_text(textwrap.dedent(code).lstrip(), encoding="utf-8")
        return tmp_path

    return _write
