"""
Utility router (health)
"""
import time


def register_utility_routes(app):
    """Register the utility routes on the FastAPI app"""

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "timestamp": time.time()}
