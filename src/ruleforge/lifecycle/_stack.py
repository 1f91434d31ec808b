"""Technology stack detection and scaffold synthesis.

Simple idea documents carry too little structure to split into topics. For
those, a fixed seven-section scaffold is synthesized around the original text.
The scaffold is parametrized by a StackProfile detected from keyword matches,
which decides the optional feature lines and the placeholder snippets.
"""

import re
from dataclasses import fields
from typing import Final

from ruleforge.lifecycle._models import StackProfile

__all__ = [
    "SCAFFOLD_SECTIONS",
    "STACK_PATTERNS",
    "backend_snippet",
    "database_snippet",
    "detect_stack",
    "frontend_types_snippet",
    "render_scaffold",
    "ui_component_snippet",
]

# =============================================================================
# Detection
# =============================================================================

STACK_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    # Frontend frameworks
    "react": re.compile(r"\b(react|nextjs|gatsby)\b", re.IGNORECASE),
    "vue": re.compile(r"\b(vue|nuxt)\b", re.IGNORECASE),
    "angular": re.compile(r"\b(angular|ng)\b", re.IGNORECASE),
    "svelte": re.compile(r"\b(svelte|sveltekit)\b", re.IGNORECASE),
    # Backend frameworks
    "node": re.compile(r"\b(node|express|nestjs)\b", re.IGNORECASE),
    "python": re.compile(r"\b(python|django|flask|fastapi)\b", re.IGNORECASE),
    "ruby": re.compile(r"\b(ruby|rails)\b", re.IGNORECASE),
    "go": re.compile(r"\b(go|golang|gin|echo)\b", re.IGNORECASE),
    # Datastores
    "sql": re.compile(r"\b(sql|postgres|mysql|sqlite)\b", re.IGNORECASE),
    "nosql": re.compile(r"\b(mongo|redis|dynamodb)\b", re.IGNORECASE),
    # Features
    "auth": re.compile(r"\b(auth|login|user|account)\b", re.IGNORECASE),
    "api": re.compile(r"\b(api|rest|graphql)\b", re.IGNORECASE),
    "mobile": re.compile(r"\b(mobile|ios|android|react native)\b", re.IGNORECASE),
    "desktop": re.compile(r"\b(desktop|electron|tauri)\b", re.IGNORECASE),
}


def detect_stack(text: str) -> StackProfile:
    """Detect technology flags from raw idea text.

    Args:
        text: Idea document content.

    Returns:
        StackProfile with a flag set for every category whose pattern matched.
    """
    flags = {
        f.name: bool(STACK_PATTERNS[f.name].search(text)) for f in fields(StackProfile)
    }
    return StackProfile(**flags)


# =============================================================================
# Placeholder snippets
# =============================================================================

_BACKEND_SNIPPETS: Final[dict[tuple[str, bool], str]] = {
    ("python", False): "```python\n# Python backend implementation will go here\n```",
    ("python", True): "```python\n# Python API implementation will go here\n```",
    ("node", False): (
        "```javascript\n// Node.js backend implementation will go here\n```"
    ),
    ("node", True): "```javascript\n// Node.js API implementation will go here\n```",
    ("ruby", False): "```ruby\n# Ruby backend implementation will go here\n```",
    ("ruby", True): "```ruby\n# Ruby API implementation will go here\n```",
    ("go", False): "```go\n// Go backend implementation will go here\n```",
    ("go", True): "```go\n// Go API implementation will go here\n```",
}

_FRONTEND_TYPES: Final[dict[str, str]] = {
    "react": "```typescript\n// React types will go here\n```",
    "vue": "```typescript\n// Vue types will go here\n```",
    "angular": "```typescript\n// Angular types will go here\n```",
    "svelte": "```typescript\n// Svelte types will go here\n```",
}

_UI_COMPONENTS: Final[dict[str, str]] = {
    "react": "```jsx\n// React component will go here\n```",
    "vue": "```vue\n<!-- Vue component will go here -->\n```",
    "angular": "```typescript\n// Angular component will go here\n```",
    "svelte": "```svelte\n<!-- Svelte component will go here -->\n```",
}

_SQL_SCHEMA: Final = "```sql\n-- SQL schema will go here\n```"
_NOSQL_SCHEMA: Final = "```javascript\n// NoSQL schema will go here\n```"
_GENERIC_BACKEND: Final = "```\n// Backend implementation will go here\n```"


def backend_snippet(profile: StackProfile) -> str:
    """Placeholder backend code block for the primary backend."""
    key = (profile.primary_backend, profile.api)
    return _BACKEND_SNIPPETS.get(key, _GENERIC_BACKEND)


def database_snippet(profile: StackProfile) -> str:
    """Placeholder schema block; SQL takes precedence over NoSQL."""
    if profile.sql:
        return _SQL_SCHEMA
    if profile.nosql:
        return _NOSQL_SCHEMA
    return "```\n// Database schema will go here\n```"


def frontend_types_snippet(profile: StackProfile) -> str:
    """Placeholder type definitions for the primary frontend."""
    return _FRONTEND_TYPES.get(
        profile.primary_frontend, "```\n// Frontend types will go here\n```"
    )


def ui_component_snippet(profile: StackProfile) -> str:
    """Placeholder UI component for the primary frontend."""
    return _UI_COMPONENTS.get(
        profile.primary_frontend, "```\n// UI components will go here\n```"
    )


# =============================================================================
# Scaffold
# =============================================================================

SCAFFOLD_SECTIONS: Final = (
    "Core Features",
    "Technical Architecture",
    "Frontend Design",
    "Data Management",
    "Deployment",
    "Development",
    "Maintenance",
)

_SCAFFOLD_TEMPLATE: Final = """# Core Features

## Overview
{idea}

## Key Features
{auth_line}{api_line}- Core business logic
- Data persistence
- Error handling
{mobile_line}{desktop_line}- Logging and monitoring

# Technical Architecture

## Backend
{backend}

## Database Schema
{schema}

# Frontend Design

## Main Components
{frontend_types}

## UI Components
{ui_component}

# Data Management

## Storage
{sql_line}{nosql_line}- File storage for assets
- Cache layer for performance
- Backup strategy

## Security
- Secure authentication
- Data encryption
- Input validation
- Regular security audits

# Deployment

## Requirements
- Version control
- CI/CD pipeline
- Monitoring
- Backup system

## Environment Variables
- Database credentials
- API keys
- Service endpoints
- Feature flags

# Development

## Setup Steps
1. Clone repository
2. Install dependencies
3. Configure environment
4. Set up database
5. Start development server

## Testing
- Unit tests
- Integration tests
- E2E tests
- Performance testing

# Maintenance

## Regular Tasks
- Dependency updates
- Security patches
- Performance monitoring
- User feedback collection

## Monitoring
- Error tracking
- Usage analytics
- Performance metrics
- Security scanning"""


def _line(enabled: bool, text: str) -> str:  # noqa: FBT001
    return f"- {text}\n" if enabled else ""


def render_scaffold(idea: str, profile: StackProfile | None = None) -> str:
    """Expand a short idea into the seven-section scaffold document.

    Args:
        idea: The original idea text, placed under Core Features / Overview.
        profile: Detected stack. Detected from `idea` when omitted.

    Returns:
        Markdown scaffold with one top-level heading per SCAFFOLD_SECTIONS
        entry. Snippets are illustrative placeholders, not executable code.
    """
    idea = idea.strip()
    if profile is None:
        profile = detect_stack(idea)

    return _SCAFFOLD_TEMPLATE.format(
        idea=idea,
        auth_line=_line(profile.auth, "User authentication and profiles"),
        api_line=_line(profile.api, "RESTful API endpoints"),
        mobile_line=_line(profile.mobile, "Mobile app support"),
        desktop_line=_line(profile.desktop, "Desktop app support"),
        backend=backend_snippet(profile),
        schema=database_snippet(profile),
        frontend_types=frontend_types_snippet(profile),
        ui_component=ui_component_snippet(profile),
        sql_line=_line(profile.sql, "SQL database for structured data"),
        nosql_line=_line(profile.nosql, "NoSQL database for flexible data"),
    )
