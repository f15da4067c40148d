"""Resolver functions for the GraphQL schema.

Each resolver takes its collaborators (store, token issuer) explicitly and
performs at most two store calls.
"""
