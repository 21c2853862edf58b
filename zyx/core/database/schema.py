"""
Database Schema Module
======================

Table definitions and indexes.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """
        Initialize all database tables.

        DESIGN: Tables are created if not exist, allowing safe restarts.
        Every server-scoped table cascades on server deletion.
        Settings tables carry UNIQUE(server_id) so upserts can use
        ON CONFLICT(server_id).
        """
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Users Table
        # DESIGN: Dashboard accounts, email stored lower-cased
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                first_name TEXT,
                last_name TEXT,
                profile_image_url TEXT,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Sessions Table
        # DESIGN: Login bookkeeping keyed by token ID, purged on startup
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                sid TEXT PRIMARY KEY,
                sess TEXT NOT NULL,
                expire REAL NOT NULL
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_sessions_expire ON sessions(expire)")

        # -----------------------------------------------------------------
        # Servers Table
        # DESIGN: Keyed by Discord guild ID, owned by one dashboard user
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS servers (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                icon_url TEXT,
                owner_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                member_count INTEGER NOT NULL DEFAULT 0,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_servers_owner ON servers(owner_id)")

        # -----------------------------------------------------------------
        # Mod Settings Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS mod_settings (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL UNIQUE REFERENCES servers(id) ON DELETE CASCADE,
                ban_enabled INTEGER NOT NULL DEFAULT 1,
                kick_enabled INTEGER NOT NULL DEFAULT 1,
                mute_enabled INTEGER NOT NULL DEFAULT 1,
                warn_enabled INTEGER NOT NULL DEFAULT 1,
                mod_roles TEXT NOT NULL DEFAULT '[]',
                log_channel_id TEXT,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Ticket Settings Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS ticket_settings (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL UNIQUE REFERENCES servers(id) ON DELETE CASCADE,
                enabled INTEGER NOT NULL DEFAULT 1,
                category_id TEXT,
                support_roles TEXT NOT NULL DEFAULT '[]',
                welcome_message TEXT NOT NULL,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Auto-Mod Settings Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS auto_mod_settings (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL UNIQUE REFERENCES servers(id) ON DELETE CASCADE,
                spam_enabled INTEGER NOT NULL DEFAULT 0,
                spam_threshold INTEGER NOT NULL DEFAULT 5,
                spam_interval INTEGER NOT NULL DEFAULT 5,
                spam_action TEXT NOT NULL DEFAULT 'mute',
                word_filter_enabled INTEGER NOT NULL DEFAULT 0,
                filtered_words TEXT NOT NULL DEFAULT '[]',
                word_filter_action TEXT NOT NULL DEFAULT 'delete',
                raid_protection_enabled INTEGER NOT NULL DEFAULT 0,
                raid_join_threshold INTEGER NOT NULL DEFAULT 10,
                raid_join_interval INTEGER NOT NULL DEFAULT 10,
                raid_action TEXT NOT NULL DEFAULT 'lockdown',
                exempt_roles TEXT NOT NULL DEFAULT '[]',
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Log Settings Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS log_settings (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL UNIQUE REFERENCES servers(id) ON DELETE CASCADE,
                log_channel_id TEXT,
                log_mod_actions INTEGER NOT NULL DEFAULT 1,
                log_message_edits INTEGER NOT NULL DEFAULT 0,
                log_message_deletes INTEGER NOT NULL DEFAULT 0,
                log_member_joins INTEGER NOT NULL DEFAULT 1,
                log_member_leaves INTEGER NOT NULL DEFAULT 1,
                log_voice_activity INTEGER NOT NULL DEFAULT 0,
                log_role_changes INTEGER NOT NULL DEFAULT 0,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Welcome Settings Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS welcome_settings (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL UNIQUE REFERENCES servers(id) ON DELETE CASCADE,
                welcome_enabled INTEGER NOT NULL DEFAULT 0,
                welcome_channel_id TEXT,
                welcome_message TEXT NOT NULL,
                welcome_embed_enabled INTEGER NOT NULL DEFAULT 1,
                welcome_embed_color TEXT NOT NULL DEFAULT '#5865F2',
                goodbye_enabled INTEGER NOT NULL DEFAULT 0,
                goodbye_channel_id TEXT,
                goodbye_message TEXT NOT NULL,
                dm_welcome_enabled INTEGER NOT NULL DEFAULT 0,
                dm_welcome_message TEXT NOT NULL,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Auto-Role Settings Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS auto_role_settings (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL UNIQUE REFERENCES servers(id) ON DELETE CASCADE,
                enabled INTEGER NOT NULL DEFAULT 0,
                join_roles TEXT NOT NULL DEFAULT '[]',
                verified_role_id TEXT,
                verification_enabled INTEGER NOT NULL DEFAULT 0,
                reaction_roles_enabled INTEGER NOT NULL DEFAULT 0,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Tickets Table
        # DESIGN: open -> closed; closed_at stamped on every close
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tickets (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL REFERENCES servers(id) ON DELETE CASCADE,
                channel_id TEXT NOT NULL,
                creator_id TEXT NOT NULL,
                creator_name TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'open',
                subject TEXT,
                created_at REAL NOT NULL,
                closed_at REAL
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_tickets_server ON tickets(server_id, created_at)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_tickets_status ON tickets(server_id, status)")

        # -----------------------------------------------------------------
        # Mod Actions Table
        # DESIGN: Append-only audit trail
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS mod_actions (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL REFERENCES servers(id) ON DELETE CASCADE,
                action_type TEXT NOT NULL,
                target_id TEXT NOT NULL,
                target_name TEXT NOT NULL,
                moderator_id TEXT NOT NULL,
                moderator_name TEXT NOT NULL,
                reason TEXT,
                created_at REAL NOT NULL
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_mod_actions_server ON mod_actions(server_id, created_at)")

        # -----------------------------------------------------------------
        # Log Events Table
        # DESIGN: Append-only server event log
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS log_events (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL REFERENCES servers(id) ON DELETE CASCADE,
                event_type TEXT NOT NULL,
                actor_id TEXT,
                actor_name TEXT,
                target_id TEXT,
                target_name TEXT,
                details TEXT,
                created_at REAL NOT NULL
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_log_events_server ON log_events(server_id, created_at)")

        # -----------------------------------------------------------------
        # Custom Commands Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS custom_commands (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL REFERENCES servers(id) ON DELETE CASCADE,
                name TEXT NOT NULL,
                description TEXT,
                response TEXT NOT NULL,
                embed_enabled INTEGER NOT NULL DEFAULT 0,
                embed_color TEXT NOT NULL DEFAULT '#5865F2',
                allowed_roles TEXT NOT NULL DEFAULT '[]',
                cooldown INTEGER NOT NULL DEFAULT 0,
                enabled INTEGER NOT NULL DEFAULT 1,
                usage_count INTEGER NOT NULL DEFAULT 0,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL,
                UNIQUE(server_id, name)
            )
        """)

        # -----------------------------------------------------------------
        # Reaction Roles Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS reaction_roles (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL REFERENCES servers(id) ON DELETE CASCADE,
                message_id TEXT NOT NULL,
                channel_id TEXT NOT NULL,
                emoji TEXT NOT NULL,
                role_id TEXT NOT NULL,
                created_at REAL NOT NULL
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_reaction_roles_server ON reaction_roles(server_id)")

        # -----------------------------------------------------------------
        # Server Analytics Table
        # DESIGN: One row per server per calendar day (YYYY-MM-DD)
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS server_analytics (
                id TEXT PRIMARY KEY,
                server_id TEXT NOT NULL REFERENCES servers(id) ON DELETE CASCADE,
                date TEXT NOT NULL,
                member_count INTEGER NOT NULL DEFAULT 0,
                message_count INTEGER NOT NULL DEFAULT 0,
                commands_used INTEGER NOT NULL DEFAULT 0,
                tickets_created INTEGER NOT NULL DEFAULT 0,
                mod_actions_count INTEGER NOT NULL DEFAULT 0,
                active_members INTEGER NOT NULL DEFAULT 0,
                UNIQUE(server_id, date)
            )
        """)

        conn.commit()
