"""
Services

- api: reading club REST collaborators (HTTP client, session, read queries)
- insights: insights computation and summaries
"""
