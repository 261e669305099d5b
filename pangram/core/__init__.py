"""Core engine primitives (context helpers, internal events, results and ports).

Kept free of agent and transport concerns so it can be reused by the UI, the agent runner and tests.
"""
