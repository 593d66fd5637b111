"""
MCP Server Resources
====================

Static documents served as MCP resources.
"""

GRAMMAR_URI = "seri://grammar"

GRAMMAR_SUMMARY = """\
Seri schedule language
======================

A document is a list of days. Each day holds sessions separated by blank
lines. Sessions written before the first "day" line belong to an
unlabelled day. "#" starts a comment that runs to the end of the line.

    day "Monday, June 2"

    "Session title"
    speakers: "Ada Lovelace", "Charles Babbage"
    time: 09:30
    duration: 1h30m
    type: talk
    lang: en
    abstract: "Free text, may span
    several lines."

Headers (each at most once per session):
    speakers  comma-separated quoted names
    time      HH:MM, 24-hour clock
    duration  45m, 2h or 1h30m
    abstract  quoted text; escapes \\" \\\\ \\n \\t
    type      talk, meal, break, fun or transport (default talk)
    lang      two-letter language code

A session without "time" or "duration" is unscheduled: accepted by
default, rejected in strict mode. Sessions of a day must not overlap and
their start times must not decrease, unless sorting is requested.
"""


def read_grammar() -> str:
    """Grammar summary with an example document."""
    return GRAMMAR_SUMMARY
