"""Create ads schema

Revision ID: 3c1e9a7b5d20
Revises:
Create Date: 2026-10-19 10:02:11.418220

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1e9a7b5d20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True)


def _lifecycle_flags() -> list[sa.Column]:
    return [
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    ]


def _flag(name: str) -> sa.Column:
    return sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.text("false"))


def _text_list(name: str) -> sa.Column:
    return sa.Column(
        name, postgresql.ARRAY(sa.Text()), nullable=False, server_default=sa.text("'{}'")
    )


def _vehicle_columns() -> list[sa.Column]:
    return [
        sa.Column("manufacturer_id", postgresql.UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("model_id", postgresql.UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("variant_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("transmission_type_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("fuel_type_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("color", sa.String(length=50), nullable=False),
        _flag("is_first_owner"),
        _flag("has_insurance"),
        _flag("has_rc_book"),
        _text_list("additional_features"),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True, unique=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )

    # Inventory
    op.create_table(
        "manufacturers",
        _uuid_pk(),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("origin_country", sa.String(length=100), nullable=True),
        *_lifecycle_flags(),
    )
    op.create_table(
        "vehicle_models",
        _uuid_pk(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_name", sa.String(length=150), nullable=True),
        sa.Column(
            "manufacturer_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("manufacturers.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("vehicle_type", sa.String(length=30), nullable=True),
        _flag("is_commercial_vehicle"),
        sa.Column("commercial_vehicle_type", sa.String(length=20), nullable=True),
        sa.Column("commercial_body_type", sa.String(length=20), nullable=True),
        sa.Column("default_payload_capacity", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("default_payload_unit", sa.String(length=10), nullable=True),
        sa.Column("default_axle_count", sa.Integer(), nullable=True),
        sa.Column("default_seating_capacity", sa.Integer(), nullable=True),
        *_lifecycle_flags(),
    )
    op.create_table(
        "vehicle_variants",
        _uuid_pk(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "model_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("vehicle_models.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("price", sa.Numeric(precision=14, scale=2), nullable=True),
        *_lifecycle_flags(),
    )
    for table in ("fuel_types", "transmission_types"):
        op.create_table(
            table,
            _uuid_pk(),
            sa.Column("name", sa.String(length=50), nullable=False, unique=True),
            sa.Column("description", sa.Text(), nullable=True),
            *_lifecycle_flags(),
        )

    # Ads
    op.create_table(
        "ads",
        _uuid_pk(),
        sa.Column("title", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(precision=14, scale=2), nullable=False),
        _text_list("images"),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column(
            "posted_by",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", name="fk_ads_posted_by_users"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index(
        "ix_ads_category_is_active_created_at", "ads", ["category", "is_active", "created_at"]
    )
    # Same expression as the full-text filter built by PostgresAdStore
    op.execute(
        "CREATE INDEX ix_ads_search_vector ON ads USING gin "
        "(to_tsvector('english'::regconfig, title || ' ' || description || ' ' || location))"
    )

    op.create_table(
        "property_ads",
        _uuid_pk(),
        sa.Column("ad_id", postgresql.UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("property_type", sa.String(length=20), nullable=False),
        sa.Column("area_sqft", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=True),
        sa.Column("bathrooms", sa.Integer(), nullable=True),
        sa.Column("floor", sa.Integer(), nullable=True),
        _flag("is_furnished"),
        _flag("has_parking"),
        _flag("has_garden"),
        _text_list("amenities"),
    )
    op.create_table(
        "vehicle_ads",
        _uuid_pk(),
        sa.Column("ad_id", postgresql.UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("vehicle_type", sa.String(length=20), nullable=False),
        *_vehicle_columns(),
    )
    op.create_table(
        "commercial_vehicle_ads",
        _uuid_pk(),
        sa.Column("ad_id", postgresql.UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("commercial_vehicle_type", sa.String(length=20), nullable=False),
        sa.Column("body_type", sa.String(length=20), nullable=False),
        sa.Column("vehicle_type", sa.String(length=20), nullable=True),
        *_vehicle_columns(),
        sa.Column("payload_capacity", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("payload_unit", sa.String(length=10), nullable=False, server_default="kg"),
        sa.Column("axle_count", sa.Integer(), nullable=False, server_default=sa.text("2")),
        sa.Column("seating_capacity", sa.Integer(), nullable=True),
        _flag("has_fitness"),
        _flag("has_permit"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "commercial_vehicle_ads",
        "vehicle_ads",
        "property_ads",
    ):
        op.drop_table(table)

    op.execute("DROP INDEX IF EXISTS ix_ads_search_vector")
    op.drop_index("ix_ads_category_is_active_created_at", table_name="ads")
    op.drop_table("ads")

    for table in (
        "transmission_types",
        "fuel_types",
        "vehicle_variants",
        "vehicle_models",
        "manufacturers",
        "users",
    ):
        op.drop_table(table)
