"""Structured OCR output: page -> block -> paragraph -> line -> word."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from screenkit.data.models import Region

# Tesseract image_to_data hierarchy levels
LEVEL_PAGE = 1
LEVEL_BLOCK = 2
LEVEL_PARAGRAPH = 3
LEVEL_LINE = 4
LEVEL_WORD = 5


@dataclass(frozen=True)
class BBox:
    """Bounding box as corner coordinates (x0, y0) - (x1, y1)."""

    x0: int
    y0: int
    x1: int
    y1: int

    @classmethod
    def from_ltwh(cls, left: int, top: int, width: int, height: int) -> "BBox":
        return cls(left, top, left + width, top + height)

    def to_region(self) -> Region:
        return Region(self.x0, self.y0, self.x1 - self.x0, self.y1 - self.y0)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


@dataclass
class Word:
    """A single recognized word. Confidence is normalized to [0, 1]."""

    text: str
    confidence: float
    bbox: BBox


@dataclass
class Line:
    bbox: BBox
    words: List[Word] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(word.text for word in self.words)

    @property
    def confidence(self) -> float:
        return _mean([word.confidence for word in self.words])


@dataclass
class Paragraph:
    bbox: BBox
    lines: List[Line] = field(default_factory=list)

    @property
    def words(self) -> List[Word]:
        return [word for line in self.lines for word in line.words]

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines if line.words)

    @property
    def confidence(self) -> float:
        return _mean([word.confidence for word in self.words])


@dataclass
class Block:
    bbox: BBox
    paragraphs: List[Paragraph] = field(default_factory=list)

    @property
    def words(self) -> List[Word]:
        return [word for paragraph in self.paragraphs for word in paragraph.words]

    @property
    def text(self) -> str:
        return "\n\n".join(p.text for p in self.paragraphs if p.words)

    @property
    def confidence(self) -> float:
        return _mean([word.confidence for word in self.words])


@dataclass
class Page:
    """
    Recognition result for one image.

    Blocks, paragraphs, lines and words keep the engine's reading order.
    Aggregate confidences are the mean of the contained words.
    """

    blocks: List[Block] = field(default_factory=list)

    @property
    def words(self) -> List[Word]:
        """All words in document order (block, paragraph, line, word)."""
        return [word for block in self.blocks for word in block.words]

    @property
    def text(self) -> str:
        return "\n\n".join(block.text for block in self.blocks if block.words)

    @property
    def confidence(self) -> float:
        return _mean([word.confidence for word in self.words])

    @classmethod
    def from_tesseract_data(cls, data: Mapping[str, Sequence[Any]]) -> "Page":
        """
        Build a Page from pytesseract.image_to_data(..., output_type=Output.DICT).

        Args:
            data: Column dict with level, block_num, par_num, line_num,
                  left, top, width, height, conf and text

        Returns:
            Page with empty words dropped
        """
        page = cls()
        blocks: Dict[int, Block] = {}
        paragraphs: Dict[Tuple[int, int], Paragraph] = {}
        lines: Dict[Tuple[int, int, int], Line] = {}

        for i in range(len(data["text"])):
            level = int(data["level"][i])
            block_num = int(data["block_num"][i])
            par_key = (block_num, int(data["par_num"][i]))
            line_key = par_key + (int(data["line_num"][i]),)
            bbox = BBox.from_ltwh(
                int(data["left"][i]),
                int(data["top"][i]),
                int(data["width"][i]),
                int(data["height"][i]),
            )

            if level == LEVEL_BLOCK:
                block = Block(bbox=bbox)
                blocks[block_num] = block
                page.blocks.append(block)

            elif level == LEVEL_PARAGRAPH:
                paragraph = Paragraph(bbox=bbox)
                paragraphs[par_key] = paragraph
                _parent_block(page, blocks, block_num, bbox).paragraphs.append(paragraph)

            elif level == LEVEL_LINE:
                line = Line(bbox=bbox)
                lines[line_key] = line
                _parent_paragraph(page, blocks, paragraphs, par_key, bbox).lines.append(line)

            elif level == LEVEL_WORD:
                text = str(data["text"][i]).strip()
                if not text:
                    continue

                line = lines.get(line_key)
                if line is None:
                    line = Line(bbox=bbox)
                    lines[line_key] = line
                    _parent_paragraph(page, blocks, paragraphs, par_key, bbox).lines.append(line)

                line.words.append(Word(
                    text=text,
                    confidence=_normalize_confidence(data["conf"][i]),
                    bbox=bbox,
                ))

        return page


def _normalize_confidence(raw: Any) -> float:
    """Tesseract reports 0-100, with -1 for rows that carry no score."""
    value = float(raw)
    if value < 0:
        return 0.0
    return min(value / 100.0, 1.0)


def _parent_block(page: Page, blocks: Dict[int, Block], block_num: int, bbox: BBox) -> Block:
    block = blocks.get(block_num)
    if block is None:
        block = Block(bbox=bbox)
        blocks[block_num] = block
        page.blocks.append(block)
    return block


def _parent_paragraph(
    page: Page,
    blocks: Dict[int, Block],
    paragraphs: Dict[Tuple[int, int], Paragraph],
    par_key: Tuple[int, int],
    bbox: BBox,
) -> Paragraph:
    paragraph = paragraphs.get(par_key)
    if paragraph is None:
        paragraph = Paragraph(bbox=bbox)
        paragraphs[par_key] = paragraph
        _parent_block(page, blocks, par_key[0], bbox).paragraphs.append(paragraph)
    return paragraph
