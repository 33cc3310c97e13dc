"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(with_updated: bool = True):
    columns = [sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False)]
    if with_updated:
        columns.append(sa.Column("updated_at", sa.DateTime(), nullable=True))
    return columns


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("user_type", sa.String(), nullable=False),
        sa.Column("status", sa.String(), server_default="pending", nullable=False),
        sa.Column("email_verified", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("email_verification_token", sa.String(), nullable=True),
        sa.Column("email_verification_expires", sa.DateTime(), nullable=True),
        sa.Column("password_reset_token", sa.String(), nullable=True),
        sa.Column("password_reset_expires", sa.DateTime(), nullable=True),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_user_type", "users", ["user_type"])
    op.create_index("ix_users_status", "users", ["status"])
    op.create_index("ix_users_email_verification_token", "users", ["email_verification_token"])
    op.create_index("ix_users_password_reset_token", "users", ["password_reset_token"])

    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("business_name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("google_maps_link", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("dietary_categories", sa.JSON(), nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("approved_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_restaurants_id", "restaurants", ["id"])
    op.create_index("ix_restaurants_city", "restaurants", ["city"])
    op.create_index("ix_restaurants_state", "restaurants", ["state"])

    op.create_table(
        "influencers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("instagram_username", sa.String(), nullable=True),
        sa.Column("instagram_link", sa.String(), nullable=True),
        sa.Column("instagram_followers", sa.Integer(), server_default="0", nullable=False),
        sa.Column("tiktok_username", sa.String(), nullable=True),
        sa.Column("tiktok_link", sa.String(), nullable=True),
        sa.Column("tiktok_followers", sa.Integer(), server_default="0", nullable=False),
        sa.Column("xhs_username", sa.String(), nullable=True),
        sa.Column("xhs_link", sa.String(), nullable=True),
        sa.Column("xhs_followers", sa.Integer(), server_default="0", nullable=False),
        sa.Column("youtube_channel", sa.String(), nullable=True),
        sa.Column("youtube_followers", sa.Integer(), server_default="0", nullable=False),
        sa.Column("tier", sa.String(), server_default="emerging", nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("approved_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_influencers_id", "influencers", ["id"])
    op.create_index("ix_influencers_city", "influencers", ["city"])
    op.create_index("ix_influencers_state", "influencers", ["state"])
    op.create_index("ix_influencers_tier", "influencers", ["tier"])

    op.create_table(
        "follower_updates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("influencer_id", sa.Integer(), sa.ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("platform", sa.String(), nullable=False),
        sa.Column("current_count", sa.Integer(), nullable=False),
        sa.Column("requested_count", sa.Integer(), nullable=False),
        sa.Column("proof_url", sa.String(), nullable=True),
        sa.Column("status", sa.String(), server_default="pending", nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("processed_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("processed_at", sa.DateTime(), nullable=True),
        *_timestamps(with_updated=False),
    )
    op.create_index("ix_follower_updates_id", "follower_updates", ["id"])
    op.create_index("ix_follower_updates_influencer_id", "follower_updates", ["influencer_id"])
    op.create_index("ix_follower_updates_status", "follower_updates", ["status"])

    op.create_table(
        "campaigns",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("brief", sa.Text(), nullable=True),
        sa.Column("total_budget", sa.Numeric(12, 2), nullable=False),
        sa.Column("deadline", sa.DateTime(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("dietary_categories", sa.JSON(), nullable=False),
        sa.Column("target_tiers", sa.JSON(), nullable=False),
        sa.Column("budget_allocations", sa.JSON(), nullable=False),
        sa.Column("max_influencers", sa.Integer(), server_default="5", nullable=False),
        sa.Column("status", sa.String(), server_default="draft", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_campaigns_id", "campaigns", ["id"])
    op.create_index("ix_campaigns_restaurant_id", "campaigns", ["restaurant_id"])
    op.create_index("ix_campaigns_deadline", "campaigns", ["deadline"])
    op.create_index("ix_campaigns_status", "campaigns", ["status"])

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False),
        sa.Column("influencer_id", sa.Integer(), sa.ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("proposed_timeline", sa.String(), nullable=True),
        sa.Column("portfolio_examples", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(), server_default="pending", nullable=False),
        sa.Column("responded_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("campaign_id", "influencer_id", name="uq_application_campaign_influencer"),
    )
    op.create_index("ix_applications_id", "applications", ["id"])
    op.create_index("ix_applications_campaign_id", "applications", ["campaign_id"])
    op.create_index("ix_applications_influencer_id", "applications", ["influencer_id"])
    op.create_index("ix_applications_status", "applications", ["status"])

    op.create_table(
        "content_submissions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("application_id", sa.Integer(), sa.ForeignKey("applications.id", ondelete="CASCADE"), nullable=False),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("influencer_id", sa.Integer(), sa.ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("video_url", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("platforms", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(), server_default="pending", nullable=False),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("posted_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_content_submissions_id", "content_submissions", ["id"])
    for column in ("application_id", "campaign_id", "restaurant_id", "influencer_id", "status"):
        op.create_index(f"ix_content_submissions_{column}", "content_submissions", [column])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("influencer_id", sa.Integer(), sa.ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("application_id", sa.Integer(), sa.ForeignKey("applications.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("platform_fee", sa.Numeric(12, 2), nullable=False),
        sa.Column("net_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(), server_default="pending", nullable=False),
        sa.Column("transaction_reference", sa.String(), nullable=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("campaign_id", "influencer_id", name="uq_payment_campaign_influencer"),
    )
    op.create_index("ix_payments_id", "payments", ["id"])
    for column in ("campaign_id", "restaurant_id", "influencer_id", "status"):
        op.create_index(f"ix_payments_{column}", "payments", [column])

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sender_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("receiver_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="SET NULL"), nullable=True),
        sa.Column("application_id", sa.Integer(), sa.ForeignKey("applications.id", ondelete="SET NULL"), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("attachment_url", sa.String(), nullable=True),
        sa.Column("status", sa.String(), server_default="sent", nullable=False),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        *_timestamps(with_updated=False),
    )
    op.create_index("ix_messages_id", "messages", ["id"])
    for column in ("sender_id", "receiver_id", "campaign_id", "created_at"):
        op.create_index(f"ix_messages_{column}", "messages", [column])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("related_entity_id", sa.String(), nullable=True),
        sa.Column("action_url", sa.String(), nullable=True),
        sa.Column("is_read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_type", "notifications", ["type"])

    op.create_table(
        "platform_settings",
        sa.Column("key", sa.String(), primary_key=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("updated_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    for table in (
        "platform_settings",
        "notifications",
        "messages",
        "payments",
        "content_submissions",
        "applications",
        "campaigns",
        "follower_updates",
        "influencers",
        "restaurants",
        "users",
    ):
        op.drop_table(table)
