"""Discord presentation for expansion-aware rosters.

Builders only: message text, embeds and autocomplete choices. The bot that
sends them lives outside this package.
"""
