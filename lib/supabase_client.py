# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and exposes the small set of row-level operations the API needs:
# - Filtered/ordered reads with optional embedded (joined) relations
# - Single-row inserts and updates by id
# - Filtered deletes
#
# The client is created lazily on first use and never torn down; the API
# process is the only owner.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_rows("cohorts", filters={"client_id": cid})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Active cohorts for a client, newest first, with their plan
        cohorts = SupabaseClient.fetch_rows(
            "cohorts",
            columns="*, plan:plans(id, name)",
            filters={"client_id": client_id},
            ranges={"end_date": ("2024-01-01", None)},
            order_by="start_date",
            descending=True,
        )
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        ranges: dict[str, tuple[Any, Any]] | None = None,
        in_filters: dict[str, list[Any]] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows from a table.

        Args:
            table: Table name
            columns: PostgREST select string. Embedded relations use the
                `alias:table(col, ...)` syntax, e.g. "*, plan:plans(id, name)"
            filters: Equality filters, column -> value
            ranges: Inclusive range filters, column -> (lower, upper).
                Either bound may be None to leave that side open.
            in_filters: Membership filters, column -> list of values
            order_by: Column to sort on
            descending: Sort direction for `order_by`
            limit: Maximum number of rows

        Returns:
            List of row dicts (empty if nothing matched)

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns)

            for column, value in (filters or {}).items():
                query = query.eq(column, normalize_uuid(value))

            for column, (lower, upper) in (ranges or {}).items():
                if lower is not None:
                    query = query.gte(column, normalize_uuid(lower))
                if upper is not None:
                    query = query.lte(column, normalize_uuid(upper))

            for column, values in (in_filters or {}).items():
                query = query.in_(column, [normalize_uuid(v) for v in values])

            if order_by:
                query = query.order(order_by, desc=descending)

            if limit:
                query = query.limit(limit)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch rows from {table}: {e}",
                code="FETCH_ROWS_FAILED",
                suggestion=f"Check that the {table} table exists and the select columns are valid",
                details={"table": table, "columns": columns, "filters": filters or {}},
            ) from e

    @classmethod
    def fetch_one(
        cls,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch the first row matching the equality filters.

        Returns:
            Row dict, or None if not found
        """
        rows = cls.fetch_rows(table, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(
        cls,
        table: str,
        data: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any]:
        """
        Insert one row and return it.

        When `columns` asks for embedded relations, the inserted row is
        re-read by id so the response carries them.

        Raises:
            SupabaseClientError: If the insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                suggestion="Check that all required columns are provided",
                details={"table": table},
            ) from e

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_EMPTY",
                details={"table": table},
            )

        row = response.data[0]
        logger.info(f"Inserted row {row.get('id')} into {table}")

        if columns != "*" and row.get("id") is not None:
            return cls.fetch_one(table, columns=columns, filters={"id": row["id"]}) or row
        return row

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: Any,
        data: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Update one row by id.

        Returns:
            The updated row, or None if no row has that id

        Raises:
            SupabaseClientError: If the update fails
        """
        client = cls.get_client()
        row_id = normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .update(data)
                .eq("id", row_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table} row {row_id}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": row_id},
            ) from e

        if not response.data:
            return None

        logger.info(f"Updated row {row_id} in {table}")

        if columns != "*":
            return cls.fetch_one(table, columns=columns, filters={"id": row_id}) or response.data[0]
        return response.data[0]

    @classmethod
    def delete_rows(cls, table: str, filters: dict[str, Any]) -> int:
        """
        Delete rows matching the equality filters.

        Refuses to run without filters so a table is never wiped by mistake.

        Returns:
            Number of deleted rows
        """
        if not filters:
            raise SupabaseClientError(
                message=f"Refusing to delete from {table} without filters",
                code="DELETE_UNFILTERED",
                suggestion="Pass at least one column filter, e.g. {'id': ...}",
                details={"table": table},
            )

        client = cls.get_client()

        try:
            query = client.table(table).delete()
            for column, value in filters.items():
                query = query.eq(column, normalize_uuid(value))
            response = query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": filters},
            ) from e

        deleted = len(response.data or [])
        logger.info(f"Deleted {deleted} rows from {table}")
        return deleted
