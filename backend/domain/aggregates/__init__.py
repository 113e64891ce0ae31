"""
Domain Aggregates

Aggregates are clusters of domain objects that can be treated as a single unit.

CustomerDetails owns its ShoppingCarts, which own their ProductOrders. The
association table declares those links and the relationship manager keeps
both sides of each one in agreement.
"""
