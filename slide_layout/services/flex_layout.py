"""
Single-axis flexbox-style distribution of items inside a content box.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Sequence

from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.geometry import CanvasSize, Margins, Rect
from slide_layout.utils.numbers import non_negative, round_half_up

Direction = Literal['row', 'column']
JUSTIFY_OPTIONS = ('flex-start', 'center', 'flex-end', 'space-between', 'space-around')
ALIGN_OPTIONS = ('flex-start', 'center', 'flex-end', 'stretch')


@dataclass(frozen=True)
class FlexLayout:
    canvas: CanvasSize
    content_width: float
    content_height: float
    direction: str = 'row'
    justify_content: str = 'space-between'
    align_items: str = 'stretch'
    gap: float = 16
    margins: Margins = Margins.uniform(32)


@dataclass(frozen=True)
class FlexItemSize:
    width: float
    height: float


def create_flex_layout(
    canvas: CanvasSize,
    direction: Direction = 'row',
    justify_content: str = 'space-between',
    align_items: str = 'stretch',
    gap: float = 16,
    margins: Optional[Margins] = None
) -> FlexLayout:
    if direction not in ('row', 'column'):
        raise InvalidArgumentError('direction', f"Unsupported flex direction: {direction}")
    if justify_content not in JUSTIFY_OPTIONS:
        raise InvalidArgumentError('justify_content', f"Unsupported justify_content: {justify_content}")
    if align_items not in ALIGN_OPTIONS:
        raise InvalidArgumentError('align_items', f"Unsupported align_items: {align_items}")

    margins = margins or Margins.uniform(32)
    return FlexLayout(
        canvas=canvas,
        content_width=non_negative(canvas.width - margins.left - margins.right),
        content_height=non_negative(canvas.height - margins.top - margins.bottom),
        direction=direction,
        justify_content=justify_content,
        align_items=align_items,
        gap=non_negative(gap),
        margins=margins,
    )


def calculate_item_size(item_count: int, layout: FlexLayout) -> FlexItemSize:
    """Equal share of the main axis; cross axis fills the content box"""
    if item_count < 1:
        raise InvalidArgumentError('item_count', f"item_count must be at least 1, got {item_count}")
    total_gaps = (item_count - 1) * layout.gap
    if layout.direction == 'row':
        return FlexItemSize(
            width=non_negative((layout.content_width - total_gaps) / item_count),
            height=layout.content_height,
        )
    return FlexItemSize(
        width=layout.content_width,
        height=non_negative((layout.content_height - total_gaps) / item_count),
    )


def _main_axis_offsets(item_count: int, item_extent: float, available: float,
                       gap: float, justify: str) -> List[float]:
    remaining = available - (item_count * item_extent + (item_count - 1) * gap)
    offsets = []
    for i in range(item_count):
        if justify == 'center':
            offset = remaining / 2 + i * (item_extent + gap)
        elif justify == 'flex-end':
            offset = remaining + i * (item_extent + gap)
        elif justify == 'space-between':
            if item_count == 1:
                offset = remaining / 2
            else:
                offset = i * (item_extent + gap + remaining / (item_count - 1))
        elif justify == 'space-around':
            per_item = remaining / item_count
            offset = per_item / 2 + i * (item_extent + gap + per_item)
        else:
            offset = i * (item_extent + gap)
        offsets.append(offset)
    return offsets


def _cross_axis_offset(item_extent: float, available: float, align: str) -> float:
    if align == 'center':
        return (available - item_extent) / 2
    if align == 'flex-end':
        return available - item_extent
    return 0.0


def distribute_flex_items(items: Sequence[Any], layout: FlexLayout) -> List[Dict[str, Any]]:
    """
    Position items along the flex direction.

    Returns one entry per item: ``{'item', 'position', 'flex_index'}`` with
    integer pixel positions.
    """
    count = len(items)
    if count == 0:
        return []

    size = calculate_item_size(count, layout)
    if layout.direction == 'row':
        main = _main_axis_offsets(count, size.width, layout.content_width, layout.gap, layout.justify_content)
        cross = _cross_axis_offset(size.height, layout.content_height, layout.align_items)
        offsets = [(x, cross) for x in main]
    else:
        main = _main_axis_offsets(count, size.height, layout.content_height, layout.gap, layout.justify_content)
        cross = _cross_axis_offset(size.width, layout.content_width, layout.align_items)
        offsets = [(cross, y) for y in main]

    placed = []
    for index, (item, (x, y)) in enumerate(zip(items, offsets)):
        placed.append({
            'item': item,
            'position': Rect(
                x=round_half_up(layout.margins.left + x),
                y=round_half_up(layout.margins.top + y),
                width=round_half_up(size.width),
                height=round_half_up(size.height),
            ),
            'flex_index': index,
        })
    return placed
