"""Starter .cocolog.toml template."""

DEFAULT_TOML = """\
# cocolog configuration
version = "1.0"

[git]
# max_count = 500          # newest N commits; omit for the whole history
# since = "2 weeks ago"    # anything `git log --since` accepts
all_branches = false
reverse = true             # oldest commit first
include_summary = true     # keep create/delete/rename lines in the log
timeout = 30               # seconds

[output]
format = "terminal"        # terminal | json | yaml
show_changes = true
show_summary = true
"""
