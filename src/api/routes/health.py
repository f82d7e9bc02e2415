"""Health and client configuration routes

Exposes only the public ids the browser payment SDKs need, never secrets.
"""

from fastapi import APIRouter

from config import ApplicationConfig

router = APIRouter(tags=["Health"])


@router.get("/")
async def health():
    return {"ok": True}


@router.get("/config")
async def square_client_config():
    """Square web payments SDK ids"""
    return {
        "applicationId": ApplicationConfig.SQUARE_APPLICATION_ID,
        "locationId": ApplicationConfig.SQUARE_LOCATION_ID,
    }


@router.get("/paypal/client")
async def paypal_client_config():
    return {
        "clientId": ApplicationConfig.PAYPAL_CLIENT_ID,
        "env": ApplicationConfig.PAYPAL_ENV,
    }
