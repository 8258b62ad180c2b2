"""Resolver package for the GraphQL schema.

Types, queries and mutations import their resolvers lazily from the
sibling modules to keep the schema modules free of storage imports.
"""
