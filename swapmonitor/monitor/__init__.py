"""Swap monitor: poll, diff and render the ASB swap table.

Modules
-------
loop
    ``MonitorLoop`` runs one poll per tick against the ASB database and
    builds a complete frame, whatever state the database is in.
renderer
    Pure ``render_*`` functions producing Rich renderables, plus
    ``MonitorRenderer`` which puts frames on screen (plain or
    ``Rich.Live``).
"""
