"""
Utilities package for Focus Track.

- md: Frontmatter splitting, parsing and rewriting; inline tags
- dates: ISO date keys
- parsers: Filter patterns, option names, property display values

Import specific modules:
    from focustrack.utils import md, dates, parsers
"""
