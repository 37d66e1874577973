"""
Fixtures for search pipeline tests.
"""

import asyncio
from typing import List, Optional

import pytest

from recorder_search.interfaces.aria import AriaTemplateResult
from recorder_search.interfaces.engine import GeneratedSelector, ISelectorEngine


class SlowAriaParser:
    """Aria binding whose calls block until released by the test."""
    
    def __init__(self, delegate):
        self._delegate = delegate
        self.release = asyncio.Event()
        self.calls: List[str] = []
    
    async def __call__(self, text: str) -> AriaTemplateResult:
        self.calls.append(text)
        await self.release.wait()
        return await self._delegate(text)


class FailingEngine(ISelectorEngine):
    """Selector engine that fails in the configured step."""
    
    def __init__(self, fail_parse: bool = True, error: Optional[Exception] = None):
        self.fail_parse = fail_parse
        self.error = error or RuntimeError("engine exploded")
    
    def parse(self, selector: str):
        if self.fail_parse:
            raise self.error
        return selector
    
    def query(self, parsed, root):
        raise self.error
    
    def generate_selector(self, element, test_id_attribute=None) -> GeneratedSelector:
        raise self.error


async def rejecting_aria_parser(text: str) -> AriaTemplateResult:
    return AriaTemplateResult(error="unsupported template")


async def empty_aria_parser(text: str) -> AriaTemplateResult:
    return AriaTemplateResult()


async def raising_aria_parser(text: str) -> AriaTemplateResult:
    raise RuntimeError("binding crashed")


@pytest.fixture
def slow_aria_parser():
    """Aria binding that waits for ``release`` before parsing."""
    from recorder_search.aria.template import parse_aria_template
    return SlowAriaParser(parse_aria_template)


@pytest.fixture
def failing_engine():
    """Factory for selector engines that raise."""
    return FailingEngine


@pytest.fixture
def aria_parsers():
    """Aria bindings that reject, return nothing or crash."""
    return {
        "rejecting": rejecting_aria_parser,
        "empty": empty_aria_parser,
        "raising": raising_aria_parser,
    }
