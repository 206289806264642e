"""
Library of named slide layout templates.

Each template is an area map on a 12 column grid with a category, the
content roles it expects, and optional per-breakpoint area overrides.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence
from types import MappingProxyType
import logging

from slide_layout.exceptions import TemplateNotFoundError
from slide_layout.services.grid_system import grid_system

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutTemplate:
    id: str
    name: str
    description: str
    category: str
    areas: Mapping[str, str]
    default_content: Sequence[str]
    responsive: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    styling: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self):
        # Shared area tables stay read-only once wrapped in a template
        object.__setattr__(self, 'areas', MappingProxyType(dict(self.areas)))
        object.__setattr__(self, 'default_content', tuple(self.default_content))
        object.__setattr__(self, 'responsive', MappingProxyType(
            {key: MappingProxyType(dict(areas)) for key, areas in self.responsive.items()}
        ))
        object.__setattr__(self, 'styling', MappingProxyType(
            {key: MappingProxyType(dict(style)) for key, style in self.styling.items()}
        ))

    def areas_for(self, breakpoint_key: Optional[str] = None) -> Dict[str, str]:
        """Base areas with the breakpoint's overrides merged in"""
        areas = dict(self.areas)
        if breakpoint_key and breakpoint_key in self.responsive:
            areas.update(self.responsive[breakpoint_key])
        return areas

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'areas': dict(self.areas),
            'defaultContent': list(self.default_content),
            'responsive': {key: dict(areas) for key, areas in self.responsive.items()},
            'styling': {key: dict(style) for key, style in self.styling.items()},
        }


_STACKED_PAIR = {'left': '1 / 1 / 3 / 2', 'right': '3 / 1 / 6 / 2'}
_STACKED_TRIPLE = {'left': '1 / 1 / 2 / 2', 'center': '2 / 1 / 4 / 2', 'right': '4 / 1 / 6 / 2'}
_STACKED_SIDEBAR = {'sidebar': '1 / 1 / 2 / 2', 'main': '2 / 1 / 6 / 2'}
_STACKED_QUAD = {
    'topLeft': '1 / 1 / 2 / 2',
    'topRight': '2 / 1 / 3 / 2',
    'bottomLeft': '3 / 1 / 4 / 2',
    'bottomRight': '4 / 1 / 6 / 2',
}

TEMPLATES: Dict[str, LayoutTemplate] = {
    template.id: template for template in (
        # Basic
        LayoutTemplate(
            id='single-column',
            name='Single Column',
            description='Simple single column layout for focused content',
            category='basic',
            areas={'content': '1 / 1 / 6 / 13'},
            default_content=['body'],
            responsive={'xs': {'content': '1 / 1 / 6 / 2'}, 'sm': {'content': '1 / 1 / 6 / 2'}},
        ),
        LayoutTemplate(
            id='double-column',
            name='Double Column',
            description='Two equal columns for balanced content',
            category='basic',
            areas={'left': '1 / 1 / 6 / 7', 'right': '1 / 7 / 6 / 13'},
            default_content=['body', 'body'],
            responsive={'xs': _STACKED_PAIR, 'sm': _STACKED_PAIR},
        ),
        LayoutTemplate(
            id='triple-column',
            name='Triple Column',
            description='Three equal columns for multi-faceted content',
            category='basic',
            areas={'left': '1 / 1 / 6 / 5', 'center': '1 / 5 / 6 / 9', 'right': '1 / 9 / 6 / 13'},
            default_content=['body', 'body', 'body'],
            responsive={
                'xs': _STACKED_TRIPLE,
                'sm': _STACKED_TRIPLE,
                'md': {'left': '1 / 1 / 3 / 7', 'center': '3 / 1 / 6 / 7', 'right': '1 / 7 / 6 / 13'},
            },
        ),
        # Header based
        LayoutTemplate(
            id='title-content',
            name='Title and Content',
            description='Large title with content section below',
            category='header',
            areas={'title': '1 / 1 / 2 / 13', 'content': '2 / 1 / 6 / 13'},
            default_content=['title', 'body'],
            responsive={'xs': {'title': '1 / 1 / 2 / 2', 'content': '2 / 1 / 6 / 2'}},
        ),
        LayoutTemplate(
            id='hero-content',
            name='Hero Section',
            description='Prominent hero area with supporting content',
            category='header',
            areas={'hero': '1 / 1 / 4 / 13', 'content': '4 / 1 / 6 / 13'},
            default_content=['title', 'body'],
            styling={'hero': {'background': 'gradient', 'fontSize': 1.5}, 'content': {'fontSize': 1.0}},
        ),
        LayoutTemplate(
            id='header-two-column',
            name='Header with Two Columns',
            description='Header spanning full width with two columns below',
            category='header',
            areas={'header': '1 / 1 / 2 / 13', 'left': '2 / 1 / 6 / 7', 'right': '2 / 7 / 6 / 13'},
            default_content=['heading', 'body', 'body'],
            responsive={
                'xs': {'header': '1 / 1 / 2 / 2', 'left': '2 / 1 / 4 / 2', 'right': '4 / 1 / 6 / 2'},
            },
        ),
        # Sidebar
        LayoutTemplate(
            id='sidebar-main',
            name='Sidebar and Main',
            description='Navigation sidebar with main content area',
            category='sidebar',
            areas={'sidebar': '1 / 1 / 6 / 4', 'main': '1 / 4 / 6 / 13'},
            default_content=['caption', 'body'],
            responsive={'xs': _STACKED_SIDEBAR, 'sm': _STACKED_SIDEBAR},
            styling={'sidebar': {'background': 'accent', 'fontSize': 0.9}, 'main': {'fontSize': 1.0}},
        ),
        LayoutTemplate(
            id='right-sidebar',
            name='Main with Right Sidebar',
            description='Main content with supplementary right sidebar',
            category='sidebar',
            areas={'main': '1 / 1 / 6 / 10', 'sidebar': '1 / 10 / 6 / 13'},
            default_content=['body', 'caption'],
            responsive={'xs': {'main': '1 / 1 / 4 / 2', 'sidebar': '4 / 1 / 6 / 2'}},
        ),
        # Grid
        LayoutTemplate(
            id='quad-grid',
            name='Four-Square Grid',
            description='Four equal quadrants in a 2x2 grid',
            category='grid',
            areas={
                'topLeft': '1 / 1 / 3 / 7',
                'topRight': '1 / 7 / 3 / 13',
                'bottomLeft': '3 / 1 / 6 / 7',
                'bottomRight': '3 / 7 / 6 / 13',
            },
            default_content=['body', 'body', 'body', 'body'],
            responsive={'xs': _STACKED_QUAD, 'sm': _STACKED_QUAD},
        ),
        LayoutTemplate(
            id='feature-showcase',
            name='Feature Showcase',
            description='Title with three feature highlights below',
            category='grid',
            areas={
                'title': '1 / 1 / 2 / 13',
                'feature1': '2 / 1 / 5 / 5',
                'feature2': '2 / 5 / 5 / 9',
                'feature3': '2 / 9 / 5 / 13',
                'description': '5 / 1 / 6 / 13',
            },
            default_content=['title', 'body', 'body', 'body', 'caption'],
            responsive={
                'xs': {
                    'title': '1 / 1 / 2 / 2',
                    'feature1': '2 / 1 / 3 / 2',
                    'feature2': '3 / 1 / 4 / 2',
                    'feature3': '4 / 1 / 5 / 2',
                    'description': '5 / 1 / 6 / 2',
                },
            },
        ),
        # Dashboard
        LayoutTemplate(
            id='dashboard-overview',
            name='Dashboard Overview',
            description='Dashboard-style layout with metrics and charts',
            category='dashboard',
            areas={
                'header': '1 / 1 / 2 / 13',
                'kpi1': '2 / 1 / 4 / 4',
                'kpi2': '2 / 4 / 4 / 7',
                'kpi3': '2 / 7 / 4 / 10',
                'kpi4': '2 / 10 / 4 / 13',
                'chart': '4 / 1 / 6 / 8',
                'summary': '4 / 8 / 6 / 13',
            },
            default_content=['heading', 'body', 'body', 'body', 'body', 'body', 'caption'],
            styling={
                'kpi1': {'background': 'primary', 'color': 'white'},
                'kpi2': {'background': 'secondary', 'color': 'white'},
                'kpi3': {'background': 'success', 'color': 'white'},
                'kpi4': {'background': 'warning', 'color': 'dark'},
            },
        ),
        # Presentation
        LayoutTemplate(
            id='comparison-layout',
            name='Comparison Layout',
            description='Side-by-side comparison with central divider',
            category='presentation',
            areas={
                'title': '1 / 1 / 2 / 13',
                'leftTitle': '2 / 1 / 3 / 6',
                'rightTitle': '2 / 8 / 3 / 13',
                'leftContent': '3 / 1 / 6 / 6',
                'divider': '2 / 6 / 6 / 8',
                'rightContent': '3 / 8 / 6 / 13',
            },
            default_content=['title', 'heading', 'heading', 'body', 'caption', 'body'],
            styling={'divider': {'background': 'accent', 'width': 2}},
        ),
        LayoutTemplate(
            id='timeline-layout',
            name='Timeline Layout',
            description='Vertical timeline with events and descriptions',
            category='presentation',
            areas={
                'title': '1 / 1 / 2 / 13',
                'timeline': '2 / 6 / 6 / 8',
                'event1': '2 / 1 / 3 / 6',
                'event2': '3 / 8 / 4 / 13',
                'event3': '4 / 1 / 5 / 6',
                'event4': '5 / 8 / 6 / 13',
            },
            default_content=['title', 'caption', 'body', 'body', 'body', 'body'],
            styling={'timeline': {'background': 'primary', 'width': 4}},
        ),
        # Content focused
        LayoutTemplate(
            id='article-layout',
            name='Article Layout',
            description='Article-style layout with title, subtitle, and body',
            category='content',
            areas={'title': '1 / 2 / 2 / 12', 'subtitle': '2 / 2 / 3 / 12', 'body': '3 / 2 / 6 / 12'},
            default_content=['title', 'heading', 'body'],
            styling={
                'title': {'alignment': 'center', 'fontSize': 1.5},
                'subtitle': {'alignment': 'center', 'fontSize': 1.1},
                'body': {'fontSize': 1.0, 'lineHeight': 1.6},
            },
        ),
        LayoutTemplate(
            id='magazine-layout',
            name='Magazine Layout',
            description='Magazine-style asymmetric layout',
            category='content',
            areas={
                'headline': '1 / 1 / 3 / 8',
                'image': '1 / 8 / 4 / 13',
                'body1': '3 / 1 / 5 / 5',
                'body2': '3 / 5 / 5 / 8',
                'sidebar': '4 / 8 / 6 / 13',
                'footer': '5 / 1 / 6 / 8',
            },
            default_content=['title', 'caption', 'body', 'body', 'caption', 'footnote'],
        ),
    )
}

SAMPLE_TEXT = {
    'title': 'Sample Presentation Title',
    'body': ('This is sample body content that demonstrates how text will appear in this layout area. '
             'Content will wrap and flow naturally within the defined space.'),
    'subheading': 'Supporting subheading',
    'caption': 'Sample caption text with additional details',
    'footnote': 'Footnote information and attribution',
}


class LayoutTemplateLibrary:
    """Lookup, search and validation over the template catalogue."""

    def __init__(self, templates: Optional[Mapping[str, LayoutTemplate]] = None):
        self.templates: Dict[str, LayoutTemplate] = dict(templates if templates is not None else TEMPLATES)

    def get_template(self, name: str) -> LayoutTemplate:
        template = self.templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)
        return template

    def get_templates_by_category(self, category: str) -> List[LayoutTemplate]:
        return [template for template in self.templates.values() if template.category == category]

    def get_categories(self) -> List[Dict[str, Any]]:
        categories = list(dict.fromkeys(template.category for template in self.templates.values()))
        return [
            {
                'id': category,
                'name': format_category_name(category),
                'count': len(self.get_templates_by_category(category)),
            }
            for category in categories
        ]

    def search_templates(
        self,
        category: Optional[str] = None,
        content: Optional[str] = None,
        responsive: bool = False,
        keyword: Optional[str] = None
    ) -> List[LayoutTemplate]:
        matches = []
        for template in self.templates.values():
            if category and template.category != category:
                continue
            if content and content not in template.default_content:
                continue
            if responsive and not template.responsive:
                continue
            if keyword:
                haystack = f"{template.name} {template.description}".lower()
                if keyword.lower() not in haystack:
                    continue
            matches.append(template)
        return matches

    def create_layout_config(
        self,
        name: str,
        breakpoint_key: Optional[str] = None,
        custom_areas: Optional[Mapping[str, str]] = None,
        content: Optional[Sequence[Any]] = None
    ) -> Dict[str, Any]:
        """Engine-ready configuration for a template at an optional breakpoint"""
        template = self.get_template(name)
        areas = dict(template.areas)
        areas.update(custom_areas or {})
        if breakpoint_key and breakpoint_key in template.responsive:
            areas.update(template.responsive[breakpoint_key])

        return {
            'template_id': template.id,
            'template_name': template.name,
            'layout_type': 'custom-grid',
            'areas': areas,
            'content': self.map_content_to_areas(
                content if content is not None else template.default_content, areas
            ),
            'styling': {key: dict(style) for key, style in template.styling.items()},
            'responsive': {key: dict(value) for key, value in template.responsive.items()},
        }

    @staticmethod
    def map_content_to_areas(content: Sequence[Any], areas: Mapping[str, str]) -> List[Dict[str, Any]]:
        """Pair content with areas in order; spare areas get empty body text"""
        mapped = []
        for index, (area_name, spec) in enumerate(areas.items()):
            item = content[index] if index < len(content) else None
            mapped.append({'item': item, 'area': area_name, 'grid_area': spec})
        return mapped

    @staticmethod
    def validate_template(template: Mapping[str, Any]) -> Dict[str, Any]:
        errors: List[str] = []
        warnings: List[str] = []

        if not template.get('name'):
            errors.append('Template name is required')
        areas = template.get('areas') or {}
        if not areas:
            errors.append('Template must have at least one area')

        for area_name, spec in areas.items():
            if grid_system.parse_area(spec) is None:
                errors.append(f"Invalid area definition for {area_name}: {spec}")

        for breakpoint_key, overrides in (template.get('responsive') or {}).items():
            for area_name in overrides:
                if area_name not in areas:
                    warnings.append(f"Responsive area {area_name} not found in base template")

        return {'valid': not errors, 'errors': errors, 'warnings': warnings}

    def generate_preview(self, name: str) -> Dict[str, Any]:
        template = self.get_template(name)
        content = []
        for index, area_name in enumerate(template.areas):
            role = template.default_content[index] if index < len(template.default_content) else 'body'
            content.append({
                'area': area_name,
                'type': role,
                'text': generate_sample_text(role, area_name),
                'preview': True,
            })
        return {
            'template_id': template.id,
            'name': template.name,
            'description': template.description,
            'areas': dict(template.areas),
            'content': content,
            'styling': {key: dict(style) for key, style in template.styling.items()},
        }

    def get_recommendations(
        self,
        content_count: int,
        content_types: Sequence[str] = (),
        screen_size: Optional[str] = None
    ) -> List[str]:
        recommendations: List[str] = []
        if content_count == 1:
            recommendations += ['single-column', 'article-layout']
        elif content_count == 2:
            recommendations += ['double-column', 'comparison-layout']
        elif content_count <= 4:
            recommendations += ['quad-grid', 'feature-showcase']

        if 'title' in content_types:
            recommendations += ['title-content', 'hero-content']

        if screen_size == 'mobile':
            recommendations = [name for name in recommendations if 'xs' in self.templates[name].responsive]

        return list(dict.fromkeys(recommendations))[:5]


def format_category_name(category: str) -> str:
    return ' '.join(word.capitalize() for word in category.split('-'))


def generate_sample_text(role: str, area_name: str) -> str:
    if role == 'heading':
        return f"{area_name[:1].upper()}{area_name[1:]} Section"
    return SAMPLE_TEXT.get(role, SAMPLE_TEXT['body'])


# Singleton instance
layout_templates = LayoutTemplateLibrary()
