# foodconnect/core/constants.py

# --- Reference data ---

MALAYSIAN_STATES = [
    "Johor", "Kedah", "Kelantan", "Melaka", "Negeri Sembilan", "Pahang",
    "Perak", "Perlis", "Pulau Pinang", "Sabah", "Sarawak", "Selangor",
    "Terengganu", "Kuala Lumpur", "Labuan", "Putrajaya",
]

DIETARY_CATEGORIES = {
    "halal_certified": "Halal Certified",
    "halal_friendly": "Halal-Friendly",
    "non_halal": "Non-Halal",
    "vegetarian": "Vegetarian Options",
    "vegan": "Vegan Options",
    "no_beef": "No Beef",
    "no_pork": "No Pork",
}

# --- Influencer tiers ---

# (minimum followers, tier), highest first
TIER_THRESHOLDS = [
    (100_000, "mega"),
    (50_000, "major"),
    (20_000, "large"),
    (10_000, "established"),
    (5_000, "growing"),
]
DEFAULT_TIER = "emerging"

TIER_LABELS = {
    "emerging": "Emerging Influencers (1K-5K)",
    "growing": "Growing Influencers (5K-10K)",
    "established": "Established Influencers (10K-20K)",
    "large": "Large Influencers (20K-50K)",
    "major": "Major Influencers (50K-100K)",
    "mega": "Mega Creators (100K+)",
}

BUDGET_SUGGESTIONS = {
    "emerging": {"min": 50, "max": 200},
    "growing": {"min": 100, "max": 400},
    "established": {"min": 200, "max": 800},
    "large": {"min": 500, "max": 1500},
    "major": {"min": 1000, "max": 3000},
    "mega": {"min": 2000, "max": 10000},
}

FOLLOWER_PLATFORMS = ["instagram", "tiktok", "xhs", "youtube"]

# --- Statuses ---

USER_TYPES = ["restaurant", "influencer", "admin"]
USER_STATUSES = ["pending", "approved", "rejected", "suspended", "active"]
ACTIVE_USER_STATUSES = ("approved", "active")

CAMPAIGN_STATUS_LABELS = {
    "draft": "Draft",
    "published": "Published",
    "closed": "Closed",
}

APPLICATION_STATUS_LABELS = {
    "pending": "Pending Review",
    "accepted": "Accepted",
    "rejected": "Rejected",
}

CONTENT_STATUS_LABELS = {
    "pending": "Pending Review",
    "approved": "Approved",
    "rejected": "Rejected",
    "posted": "Posted on Platforms",
}

CONTENT_PLATFORMS = [
    {"id": "instagram", "name": "Instagram", "description": "Instagram Reels/Posts"},
    {"id": "tiktok", "name": "TikTok", "description": "TikTok Videos"},
    {"id": "xhs", "name": "XHS (Xiaohongshu)", "description": "Little Red Book"},
    {"id": "youtube", "name": "YouTube", "description": "YouTube Videos/Shorts"},
    {"id": "facebook", "name": "Facebook", "description": "Facebook Posts/Videos"},
]
CONTENT_PLATFORM_IDS = [p["id"] for p in CONTENT_PLATFORMS]

CONTENT_WORKFLOW = [
    {"step": 1, "status": "pending", "title": "Submit for Review",
     "description": "Influencer submits content with video link", "actor": "Influencer"},
    {"step": 2, "status": "approved", "title": "Content Approval",
     "description": "Restaurant reviews and approves content", "actor": "Restaurant"},
    {"step": 3, "status": "posted", "title": "Post on Platforms",
     "description": "Influencer posts on all agreed platforms", "actor": "Influencer"},
]

PAYMENT_STATUS_LABELS = {
    "pending": "Pending Payment",
    "received": "Payment Received",
    "held": "Payment Held (Escrow)",
    "released": "Payment Released",
    "cancelled": "Payment Cancelled",
}

PAYMENT_WORKFLOW = [
    {"status": "pending", "description": "Restaurant needs to transfer payment to admin account",
     "actor": "Restaurant", "next_status": "received"},
    {"status": "received", "description": "Admin confirms payment received and holds in escrow",
     "actor": "Admin", "next_status": "held"},
    {"status": "held", "description": "Content created and approved, ready for release",
     "actor": "Admin", "next_status": "released"},
    {"status": "released", "description": "Payment transferred to influencer",
     "actor": "Admin", "next_status": None},
]

# action -> (required current status, new status); cancel is handled separately
PAYMENT_TRANSITIONS = {
    "confirm_received": ("pending", "received"),
    "hold_payment": ("received", "held"),
    "release_payment": ("held", "released"),
}
PAYMENT_ACTIONS = ["confirm_received", "hold_payment", "release_payment", "cancel_payment"]

# --- Uploads ---

ALLOWED_UPLOAD_EXTENSIONS = {
    ".jpeg", ".jpg", ".png", ".gif",
    ".mp4", ".mov", ".avi", ".wmv", ".flv", ".webm",
}
