"""Pytest 配置文件"""

from typing import Any

import pytest

from libs.http_client import Message


class CountingFormatter:
    def __init__(self, content: str = "formatted"):
        self.content = content
        self.calls = 0

    def format(self, message: Message) -> str:
        self.calls += 1
        return self.content


class CountingParser:
    def __init__(self, data: dict[str, Any] | None = None):
        self.data = data if data is not None else {"parsed": True}
        self.calls = 0

    def parse(self, message: Message) -> dict[str, Any]:
        self.calls += 1
        return self.data


@pytest.fixture
def counting_formatter():
    return CountingFormatter()


@pytest.fixture
def counting_parser():
    return CountingParser()


@pytest.fixture
def message():
    return Message()
