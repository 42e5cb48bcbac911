"""Composable file-name exclusion predicates shared by policy checks.

Each check lists the exclusions it needs in `create_checker(exclude=...)`;
the engine itself never excludes files.
"""

from typing import Callable

PathPredicate = Callable[[str], bool]


def _base_name(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def is_test_file(path: str) -> bool:
    """*.test.*, *.spec.* and Python test_*.py / *_test.py files."""
    name = _base_name(path)
    if ".test." in name or ".spec." in name:
        return True
    return name.endswith(".py") and (name.startswith("test_") or name.endswith("_test.py"))


def is_dummy_file(path: str) -> bool:
    """Fixture builders such as todo.dummy.ts or dummy.ts."""
    name = _base_name(path)
    return ".dummy." in name or name.startswith("dummy.")


def is_generated_file(path: str) -> bool:
    name = _base_name(path)
    return ".generated." in name or ".gen." in name or "/generated/" in path


def is_type_declaration_file(path: str) -> bool:
    return path.endswith(".d.ts")


def in_directory(directory: str) -> PathPredicate:
    """Match files below a directory named `directory` anywhere in the path."""
    needle = "/" + directory.strip("/") + "/"

    def predicate(path: str) -> bool:
        return needle in "/" + path

    return predicate


def name_contains(fragment: str) -> PathPredicate:
    def predicate(path: str) -> bool:
        return fragment in _base_name(path)

    return predicate


def name_lacks(fragment: str) -> PathPredicate:
    """Exclude every file whose name does not contain `fragment`."""

    def predicate(path: str) -> bool:
        return fragment not in _base_name(path)

    return predicate


def any_of(*predicates: PathPredicate) -> PathPredicate:
    def predicate(path: str) -> bool:
        return any(p(path) for p in predicates)

    return predicate


# The usual pair: test suites and fixture builders are never review targets.
TEST_OR_DUMMY: tuple[PathPredicate, ...] = (is_test_file, is_dummy_file)
