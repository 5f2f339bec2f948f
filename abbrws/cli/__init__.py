"""
Command line tools: ``abbrws-signal`` and ``abbrws-file``.
"""
