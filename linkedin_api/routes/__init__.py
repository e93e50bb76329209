from linkedin_api.routes import auth, connections, health, notifications, posts, users

API_V1 = "/api/v1"

# (prefix, router, tag) for every versioned route group
ROUTE_GROUPS = (
    (f"{API_V1}/auth", auth.router, "Authentication"),
    (f"{API_V1}/users", users.router, "Users"),
    (f"{API_V1}/posts", posts.router, "Posts"),
    (f"{API_V1}/notifications", notifications.router, "Notifications"),
    (f"{API_V1}/connections", connections.router, "Connections"),
)

__all__ = ["API_V1", "ROUTE_GROUPS", "health"]
