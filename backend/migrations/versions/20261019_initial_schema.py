"""Initial schema: transactions, document sequences, phone models

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_code", sa.String(32), nullable=False, server_default="EASTWOOD"),
        sa.Column("invoice_number", sa.String(32), nullable=True),
        sa.Column("customer_name", sa.String(128), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=True),
        sa.Column("phone_model", sa.String(128), nullable=False),
        sa.Column("phone_imei", sa.String(15), nullable=True),
        sa.Column("phone_storage", sa.String(16), nullable=True),
        sa.Column("phone_price", sa.String(32), nullable=False, server_default="0"),
        sa.Column("repair_items", sa.JSON(), nullable=False),
        sa.Column("devices", sa.JSON(), nullable=False),
        sa.Column("repair_line_items", sa.JSON(), nullable=False),
        sa.Column("warranty_period", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("policy_type", sa.String(16), nullable=True),
        sa.Column("custom_policy_text", sa.Text(), nullable=True),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("transactions", schema=None) as batch_op:
        batch_op.create_index("ix_transactions_store_code", ["store_code"], unique=False)
        batch_op.create_index("ix_transactions_transaction_date", ["transaction_date"], unique=False)
        batch_op.create_index("ix_transactions_deleted_at", ["deleted_at"], unique=False)
        batch_op.create_index("ix_transactions_deleted_date", ["deleted_at", "transaction_date"], unique=False)
        batch_op.create_index("ix_transactions_store_invoice", ["store_code", "invoice_number"], unique=False)

    op.create_table(
        "document_sequences",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_code", sa.String(32), nullable=False),
        sa.Column("sequence_key", sa.String(64), nullable=False),
        sa.Column("next_number", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("store_code", "sequence_key", name="uq_doc_sequences_store_key"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("document_sequences", schema=None) as batch_op:
        batch_op.create_index("ix_document_sequences_store_code", ["store_code"], unique=False)
        batch_op.create_index("ix_document_sequences_sequence_key", ["sequence_key"], unique=False)

    op.create_table(
        "phone_models",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("brand", sa.String(64), nullable=False),
        sa.Column("model_name", sa.String(128), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("brand", "model_name", name="uq_phone_models_brand_name"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("phone_models", schema=None) as batch_op:
        batch_op.create_index("ix_phone_models_brand", ["brand"], unique=False)
        batch_op.create_index("ix_phone_models_is_active", ["is_active"], unique=False)


def downgrade():
    with op.batch_alter_table("phone_models", schema=None) as batch_op:
        batch_op.drop_index("ix_phone_models_is_active")
        batch_op.drop_index("ix_phone_models_brand")
    op.drop_table("phone_models")

    with op.batch_alter_table("document_sequences", schema=None) as batch_op:
        batch_op.drop_index("ix_document_sequences_sequence_key")
        batch_op.drop_index("ix_document_sequences_store_code")
    op.drop_table("document_sequences")

    with op.batch_alter_table("transactions", schema=None) as batch_op:
        batch_op.drop_index("ix_transactions_store_invoice")
        batch_op.drop_index("ix_transactions_deleted_date")
        batch_op.drop_index("ix_transactions_deleted_at")
        batch_op.drop_index("ix_transactions_transaction_date")
        batch_op.drop_index("ix_transactions_store_code")
    op.drop_table("transactions")
