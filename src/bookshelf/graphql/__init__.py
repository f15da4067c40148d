"""GraphQL API for the Bookshelf service."""
