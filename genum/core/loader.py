"""
Loading of the Go package that holds the file under processing.
"""
import logging
import os
from typing import List, Optional

from pydantic import BaseModel

from genum.core.config import config
from genum.core.engine.go_syntax import GoSyntaxBuilder
from genum.core.error_handling import PackageNotFoundError, SourceFileNotFoundError, SourceReadError
from genum.models.syntax import Package, SourceFile

logger = logging.getLogger(__name__)

TEST_FILE_SUFFIX = '_test.go'


class Environment(BaseModel):
    """The loaded package and the file whose directives are processed"""
    package: Package
    source_file: SourceFile
    source_file_name: str

    @property
    def package_name(self) -> str:
        return self.package.name

    @property
    def directory(self) -> str:
        return self.package.directory


class Loader:
    """
    Loads every Go file of one directory as a single package.

    Args:
        directory: Directory holding the package
        include_tests: Whether ``_test.go`` files belong to the package;
            defaults to the ``loader.include_tests`` setting
        builder: Syntax builder used to parse each file
    """

    def __init__(self, directory: str = '.', include_tests: Optional[bool] = None,
                 builder: Optional[GoSyntaxBuilder] = None):
        self.directory = os.path.abspath(directory)
        if include_tests is None:
            include_tests = config.get('loader', 'include_tests', False)
        self.include_tests = include_tests
        self.builder = builder or GoSyntaxBuilder()

    def load(self, source_file_name: str) -> Environment:
        """
        Load the package and locate ``source_file_name`` inside it.

        Raises:
            PackageNotFoundError: If the directory holds no Go files
            SourceFileNotFoundError: If no file of the package has the given base name
        """
        package = self.load_package()
        source_file = self.load_source_file(package, source_file_name)
        return Environment(package=package, source_file=source_file, source_file_name=source_file_name)

    def load_package(self) -> Package:
        paths = self._source_paths()
        if not paths:
            raise PackageNotFoundError(self.directory)

        files: List[SourceFile] = []
        package_name = ''
        for path in paths:
            source_file = self._parse(path)
            if not package_name:
                package_name = source_file.package
            elif source_file.package != package_name:
                logger.warning(
                    f"Skipping {source_file.name}: package {source_file.package}, expected {package_name}"
                )
                continue
            files.append(source_file)

        if not package_name:
            raise PackageNotFoundError(self.directory)
        logger.info(f"Loaded package {package_name} ({len(files)} files) from {self.directory}")
        return Package(name=package_name, directory=self.directory, files=files)

    @staticmethod
    def load_source_file(package: Package, source_file_name: str) -> SourceFile:
        source_file = package.file_named(os.path.basename(source_file_name or ''))
        if source_file is None:
            raise SourceFileNotFoundError(source_file_name, package.name)
        return source_file

    def _source_paths(self) -> List[str]:
        extension = config.get('loader', 'source_extension', '.go')
        try:
            entries = sorted(os.listdir(self.directory))
        except OSError as e:
            logger.error(f"Cannot list {self.directory}: {e}")
            return []
        paths = []
        for entry in entries:
            path = os.path.join(self.directory, entry)
            if not entry.endswith(extension) or not os.path.isfile(path):
                continue
            if entry.endswith(TEST_FILE_SUFFIX) and not self.include_tests:
                continue
            paths.append(path)
        return paths

    def _parse(self, path: str) -> SourceFile:
        logger.debug(f"Parsing {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                code = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(os.path.basename(path), e) from e
        return self.builder.build(path, code)
