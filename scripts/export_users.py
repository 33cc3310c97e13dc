# scripts/export_users.py

import json
import logging
import sys
import os

# Allows importing the project from the parent directory
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy.orm import joinedload

from foodconnect.db.session import SessionLocal
from foodconnect.models.user import User

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# --- Constants ---
DEFAULT_OUTPUT_PATH = 'users_export.json'
RESTAURANT_FIELDS = (
    "business_name", "description", "phone", "address", "google_maps_link",
    "website", "city", "state", "dietary_categories",
)
INFLUENCER_FIELDS = (
    "display_name", "phone", "bio", "location", "city", "state", "tier",
    "instagram_username", "instagram_followers", "tiktok_username", "tiktok_followers",
    "xhs_username", "xhs_followers", "youtube_channel", "youtube_followers",
)


def _iso(value):
    return value.isoformat() if value else None


def serialize_user(user: User) -> dict:
    """Account data plus the profile; password hash and tokens are left out."""
    data = {
        "id": user.id,
        "email": user.email,
        "user_type": user.user_type,
        "status": user.status,
        "email_verified": user.email_verified,
        "last_login": _iso(user.last_login),
        "created_at": _iso(user.created_at),
        "profile": None,
    }
    if user.user_type == "restaurant" and user.restaurant:
        data["profile"] = {field: getattr(user.restaurant, field) for field in RESTAURANT_FIELDS}
    elif user.user_type == "influencer" and user.influencer:
        data["profile"] = {field: getattr(user.influencer, field) for field in INFLUENCER_FIELDS}
    return data


def export_users(db, output_path: str) -> int:
    logger.info("--- Starting User Export ---")
    users = (
        db.query(User)
        .options(joinedload(User.restaurant), joinedload(User.influencer))
        .order_by(User.id)
        .all()
    )
    with open(output_path, mode='w', encoding='utf-8') as f:
        json.dump([serialize_user(u) for u in users], f, ensure_ascii=False, indent=2)
    logger.info(f"Exported {len(users)} users to {output_path}.")
    return len(users)


if __name__ == "__main__":
    output = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_OUTPUT_PATH
    with SessionLocal() as db:
        export_users(db, output)
