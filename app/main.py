from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.exceptions import registerExceptionHandlers
from app.core.logger import setupLogging
from app.routes.user import router as userRouter
from app.routes.ride import router as rideRouter
from app.routes.booking import router as bookingRouter
from app.routes.ai import router as aiRouter

setupLogging()

app = FastAPI(title="UniPool Campus Ride Sharing")

# Enable CORS for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.corsOrigins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

registerExceptionHandlers(app)

app.include_router(userRouter)
app.include_router(rideRouter)
app.include_router(bookingRouter)
app.include_router(aiRouter)

@app.get("/health")
def healthCheck():
    return {
        "status": "OK",
        "service": settings.SERVICE_NAME
    }
