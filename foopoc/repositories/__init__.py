"""Repositories — adapters implementing core.repository_protocols.FooRepository.

Invariants:
    - SqlFooRepository is the production adapter; InMemoryFooRepository backs tests
"""
