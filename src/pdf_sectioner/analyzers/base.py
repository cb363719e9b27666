"""Base class for document analyzers."""

from abc import ABC, abstractmethod
from typing import Any

from pdf_sectioner.document import DocumentSource


class BaseAnalyzer(ABC):
    """An analyzer reads a DocumentSource and returns one kind of structure."""

    def __init__(self, document: DocumentSource):
        self.document = document

    @abstractmethod
    def analyze(self) -> list[Any]:
        raise NotImplementedError
