from contextlib import AbstractContextManager, contextmanager
from typing import Generator, Protocol

import pytest
from xcuery import config
from xcuery.node import Element, Text, element, text


@pytest.fixture
def clean_ser_types():
    """Cleans all new types added to xcuery.serialize.TYPES by a single test."""
    import xcuery.serialize

    cached = xcuery.serialize.TYPES.copy()
    try:
        yield
    finally:
        xcuery.serialize.TYPES.clear()
        xcuery.serialize.TYPES.update(cached)


class ConfigFixtureProtocol(Protocol):
    def __call__(
        self,
        *,
        logging: bool = config.TRACE_LOGGING,
        runtime_checks: bool = config.RUNTIME_TYPE_CHECK,
    ) -> AbstractContextManager[None]:
        ...


@pytest.fixture
def xcuery_config() -> ConfigFixtureProtocol:
    @contextmanager
    def _with_config(
        *,
        logging: bool = config.TRACE_LOGGING,
        runtime_checks: bool = config.RUNTIME_TYPE_CHECK,
    ) -> Generator[None, None, None]:
        old_logging = config.TRACE_LOGGING
        old_runtime_checks = config.RUNTIME_TYPE_CHECK
        config.TRACE_LOGGING = logging
        config.RUNTIME_TYPE_CHECK = runtime_checks
        try:
            yield
        finally:
            config.TRACE_LOGGING = old_logging
            config.RUNTIME_TYPE_CHECK = old_runtime_checks

    return _with_config


def leaf(tag: str, content: str) -> Element:
    return element(tag, [], [text(content)])


@pytest.fixture
def entry1() -> Element:
    return element(
        "entry",
        [],
        [
            leaf("name", "Hanus"),
            leaf("first", "Michael"),
            leaf("phone", "+49-431-8807271"),
            leaf("email", "mh@x"),
            leaf("email", "hanus@y"),
        ],
    )


@pytest.fixture
def entry2() -> Element:
    return element(
        "entry",
        [],
        [
            leaf("phone", "+49-431-8807272"),
            leaf("name", "Smith"),
            leaf("first", "Bill"),
        ],
    )


@pytest.fixture
def contacts(entry1: Element, entry2: Element) -> Element:
    return element("contacts", [], [entry1, entry2])


@pytest.fixture
def hello() -> Text:
    return text("hello")
