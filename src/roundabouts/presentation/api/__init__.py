"""
API package.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routes import dashboard, streaming
from ...infrastructure.broadcast.realtime_broadcaster import RealtimeBroadcaster

# Initialize main app
app = FastAPI(title="Roundabout Monitor API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(dashboard.app.router, tags=["dashboard"])
app.include_router(streaming.app.router, tags=["streaming"])

# Initialize shared components
broadcaster = RealtimeBroadcaster()
streaming.init_broadcaster(broadcaster)
