"""
Content items accepted by the layout engine.

Items are a tagged union on ``type``: the six text roles share one model,
tabular data has its own. Both are frozen; transforms return copies.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

TextRole = Literal['title', 'heading', 'subheading', 'body', 'caption', 'footnote']
Importance = Literal['low', 'medium', 'high']
ViewingDistance = Literal['close', 'medium', 'far']


class TextContent(BaseModel):
    """A run of text with a semantic role"""
    model_config = ConfigDict(frozen=True)

    type: TextRole = Field(..., description="Semantic role driving the font band")
    text: str = Field(default='', description="Text to place")
    importance: Importance = Field(default='medium', description="Relative emphasis")
    area: Optional[str] = Field(default=None, description="Named grid area to place this item in")
    font_size: Optional[float] = Field(default=None, gt=0, description="Explicit font size override")
    truncated: bool = Field(default=False, description="Set when text was shortened for a small canvas")
    mobile_optimized: bool = Field(default=False, description="Set once small-canvas optimization ran")

    @property
    def role(self) -> str:
        return self.type

    @property
    def plain_text(self) -> str:
        return self.text


class TableContent(BaseModel):
    """Tabular content; the first row of ``data`` is the header"""
    model_config = ConfigDict(frozen=True)

    type: Literal['table']
    data: List[List[Union[str, int, float]]] = Field(default_factory=list)
    text: str = Field(default='', description="Fallback text when data is empty")
    importance: Importance = 'medium'
    area: Optional[str] = None
    font_size: Optional[float] = Field(default=None, gt=0)
    mobile_optimized: bool = False

    @property
    def role(self) -> str:
        # Tables are sized like body copy
        return 'body'

    @property
    def plain_text(self) -> str:
        if not self.data:
            return self.text
        return '\n'.join(' '.join(str(cell) for cell in row) for row in self.data)


ContentItem = Annotated[Union[TextContent, TableContent], Field(discriminator='type')]
