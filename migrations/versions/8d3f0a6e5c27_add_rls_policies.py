"""add_rls_policies

Revision ID: 8d3f0a6e5c27
Revises: 4b1e7c2a9f10
Create Date: 2026-03-02 09:40:05.551872

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8d3f0a6e5c27"
down_revision: str | Sequence[str] | None = "4b1e7c2a9f10"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLES = ["teams", "team_members", "team_invitations", "tasks"]


def upgrade() -> None:
    """Add Row Level Security policies for team-scoped tables.

    Note: The FastAPI backend uses a service account that bypasses RLS.
    These policies apply to direct Supabase client connections and back up
    the application-level checks.
    """
    # --- Helper function to avoid RLS recursion ---
    # Checks team membership without triggering RLS on team_members itself.
    op.execute("""
        CREATE OR REPLACE FUNCTION get_user_team_ids(uid UUID)
        RETURNS SETOF UUID
        LANGUAGE sql
        SECURITY DEFINER
        STABLE
        SET search_path = public
        AS $$
            SELECT team_id FROM team_members WHERE user_id = uid
            UNION
            SELECT id FROM teams WHERE owner_id = uid;
        $$;
    """)

    for table in TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- Teams policies ---
    op.execute("""
        CREATE POLICY teams_select ON teams
            FOR SELECT USING (
                id IN (SELECT get_user_team_ids((SELECT auth.uid())))
            );
    """)
    op.execute("""
        CREATE POLICY teams_insert ON teams
            FOR INSERT WITH CHECK (
                owner_id = (SELECT auth.uid())
            );
    """)

    # --- Team members policies ---
    op.execute("""
        CREATE POLICY team_members_select ON team_members
            FOR SELECT USING (
                team_id IN (SELECT get_user_team_ids((SELECT auth.uid())))
            );
    """)
    # INSERT: a user may only add themselves
    op.execute("""
        CREATE POLICY team_members_insert ON team_members
            FOR INSERT WITH CHECK (
                user_id = (SELECT auth.uid())
            );
    """)

    # --- Team invitations policies ---
    # SELECT: the invitee (by email) or members of the team
    op.execute("""
        CREATE POLICY team_invitations_select ON team_invitations
            FOR SELECT USING (
                lower(email) = lower((SELECT auth.jwt() ->> 'email'))
                OR team_id IN (SELECT get_user_team_ids((SELECT auth.uid())))
            );
    """)
    # INSERT: only the team owner
    op.execute("""
        CREATE POLICY team_invitations_insert ON team_invitations
            FOR INSERT WITH CHECK (
                team_id IN (SELECT id FROM teams WHERE owner_id = (SELECT auth.uid()))
            );
    """)
    # UPDATE: only the invitee, and only while pending
    op.execute("""
        CREATE POLICY team_invitations_update ON team_invitations
            FOR UPDATE USING (
                lower(email) = lower((SELECT auth.jwt() ->> 'email'))
                AND status = 'pending'
            );
    """)

    # --- Tasks policies ---
    op.execute("""
        CREATE POLICY tasks_all ON tasks
            FOR ALL USING (
                (team_id IS NULL AND user_id = (SELECT auth.uid()))
                OR team_id IN (SELECT get_user_team_ids((SELECT auth.uid())))
            );
    """)


def downgrade() -> None:
    """Drop all RLS policies and disable RLS."""
    policies = [
        ("tasks_all", "tasks"),
        ("team_invitations_update", "team_invitations"),
        ("team_invitations_insert", "team_invitations"),
        ("team_invitations_select", "team_invitations"),
        ("team_members_insert", "team_members"),
        ("team_members_select", "team_members"),
        ("teams_insert", "teams"),
        ("teams_select", "teams"),
    ]
    for policy_name, table_name in policies:
        op.execute(f"DROP POLICY IF EXISTS {policy_name} ON {table_name};")

    for table in reversed(TABLES):
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")

    op.execute("DROP FUNCTION IF EXISTS get_user_team_ids(UUID);")
