"""文档转换器单元测试."""

from dataclasses import dataclass

import pytest

from elasticmanager.converter import DefaultDocumentConverter, DocumentConverter


@dataclass
class Article:
    title: str
    tags: list


class Comment:
    doc_type = "comment"

    def __init__(self, text):
        self.text = text

    def to_dict(self):
        return {"text": self.text}


@pytest.fixture
def converter() -> DefaultDocumentConverter:
    return DefaultDocumentConverter()


def test_implements_protocol(converter) -> None:
    assert isinstance(converter, DocumentConverter)


def test_mapping_is_copied(converter) -> None:
    document = {"title": "x"}
    fields = converter.convert_to_dict(document)
    fields["title"] = "y"
    assert document == {"title": "x"}


def test_dataclass(converter) -> None:
    article = Article(title="x", tags=["a"])
    assert converter.convert_to_dict(article) == {"title": "x", "tags": ["a"]}
    assert converter.type_name(article) == "article"


def test_to_dict_object(converter) -> None:
    comment = Comment("hi")
    assert converter.convert_to_dict(comment) == {"text": "hi"}
    assert converter.type_name(comment) == "comment"


def test_unsupported(converter) -> None:
    with pytest.raises(TypeError, match="无法转换的文档类型"):
        converter.convert_to_dict(42)
