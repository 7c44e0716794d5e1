"""
Blog post body: an ordered list of typed blocks.

Blocks use the ``{"type": ..., "data": {...}}`` shape produced by block-style
rich text editors.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import ContentValidationError, FieldError
from .section_types import field_errors

BLOCK_TYPES = ("paragraph", "header", "image", "list", "quote", "delimiter")


class _Data(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ParagraphData(_Data):
    text: str = ""


class HeaderData(_Data):
    text: Annotated[str, Field(min_length=1)]
    level: Annotated[int, Field(ge=1, le=6)] = 2


class ImageData(_Data):
    url: Annotated[str, Field(min_length=1, max_length=512)]
    caption: Optional[str] = None


class ListData(_Data):
    style: Literal["ordered", "unordered"] = "unordered"
    items: List[str] = Field(default_factory=list)


class QuoteData(_Data):
    text: Annotated[str, Field(min_length=1)]
    caption: Optional[str] = None


class DelimiterData(_Data):
    pass


class _Block(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None


class ParagraphBlock(_Block):
    type: Literal["paragraph"]
    data: ParagraphData


class HeaderBlock(_Block):
    type: Literal["header"]
    data: HeaderData


class ImageBlock(_Block):
    type: Literal["image"]
    data: ImageData


class ListBlock(_Block):
    type: Literal["list"]
    data: ListData


class QuoteBlock(_Block):
    type: Literal["quote"]
    data: QuoteData


class DelimiterBlock(_Block):
    type: Literal["delimiter"]
    data: DelimiterData = Field(default_factory=DelimiterData)


Block = Annotated[
    Union[ParagraphBlock, HeaderBlock, ImageBlock, ListBlock, QuoteBlock, DelimiterBlock],
    Field(discriminator="type"),
]

_blocks_adapter = TypeAdapter(List[Block])
_block_adapter = TypeAdapter(Block)


def validate_blocks(blocks: Any) -> List[FieldError]:
    if not isinstance(blocks, list):
        return [FieldError("content", "Content must be a list of blocks")]
    try:
        _blocks_adapter.validate_python(blocks)
    except ValidationError as exc:
        return field_errors(exc, prefix="content")
    return []


def normalize_blocks(blocks: Any) -> List[Dict[str, Any]]:
    errors = validate_blocks(blocks)
    if errors:
        raise ContentValidationError(errors)
    return [
        block.model_dump(exclude_none=True)
        for block in _blocks_adapter.validate_python(blocks)
    ]


def parse_block(raw: Any):
    """Parse one block, returning ``None`` when it is not a valid block."""
    try:
        return _block_adapter.validate_python(raw)
    except ValidationError:
        return None
