"""
API Routers - Organized endpoint handlers for the Rooming API.

- analysis: Constraint analysis, solution reconciliation and solving
"""
