# tests/conftest.py

import io

import pytest
from rich.console import Console

from sglacier.commands import CommandContext
from sglacier.core.config import RunOptions
from sglacier.glacier import MockArchiveService
from sglacier.receipts.migration import new_document
from sglacier.receipts.store import ReceiptStore


class ContextFactory:
    """Builds CommandContexts that share one store, service and captured console."""

    def __init__(self, tmp_path):
        self.tmp_path = tmp_path
        self.store = ReceiptStore(new_document())
        self.service = MockArchiveService(label="TEST")
        self.output = io.StringIO()
        self.console = Console(file=self.output, width=200)

    def __call__(self, **overrides) -> CommandContext:
        values = {
            "receipts_file": str(self.tmp_path / "receipts.json"),
            "vault": "V",
            "job_output_prefix": str(self.tmp_path / "job_output."),
        }
        values.update(overrides)
        return CommandContext(RunOptions(**values), self.store, self.service, self.console)

    @property
    def text(self) -> str:
        return self.output.getvalue()


@pytest.fixture
def make_context(tmp_path):
    return ContextFactory(tmp_path)


@pytest.fixture
def make_file(tmp_path):
    def _make_file(name: str, content: bytes = b"some archive data") -> str:
        path = tmp_path / name
        path.write_bytes(content)
        return str(path)
    return _make_file
