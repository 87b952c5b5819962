"""Starter .sastview.toml template."""

CONFIG_FILENAME = ".sastview.toml"

DEFAULT_TOML = """\
# sastview configuration
version = "1.0"

[output]
format = "terminal"       # terminal | json
show_summary = true
show_identifiers = true

[filters]
# severity = "High"       # Critical | High | Medium | Low (prefix match)
# path = "src/"           # file path prefix

[links]
# repo = "https://gitlab.com/group/project/-/blob/main/"
"""
