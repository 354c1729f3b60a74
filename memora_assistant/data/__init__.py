"""
Static Data - Flow Definitions, Keyword Catalogue, Canned Texts and Suggestions
"""
