"""SQL commands used by quota management package.

Every statement that changes `last_reset_date` contains the condition
`last_reset_date < <new date>` so a write can only move the date forward,
regardless of what the writer observed earlier.
"""

RECORD_COLUMNS = (
    "user_id, tokens_available, tokens_used, last_reset_date, created_at, updated_at"
)

CREATE_QUOTA_TABLE_PG = """
    CREATE TABLE IF NOT EXISTS user_tokens (
        user_id           text NOT NULL,
        tokens_available  int NOT NULL,
        tokens_used       int NOT NULL DEFAULT 0,
        last_reset_date   date NOT NULL,
        created_at        timestamp with time zone NOT NULL,
        updated_at        timestamp with time zone NOT NULL,
        PRIMARY KEY(user_id)
    );
    """


CREATE_QUOTA_TABLE_SQLITE = """
    CREATE TABLE IF NOT EXISTS user_tokens (
        user_id           text NOT NULL,
        tokens_available  int NOT NULL,
        tokens_used       int NOT NULL DEFAULT 0,
        last_reset_date   text NOT NULL,
        created_at        text NOT NULL,
        updated_at        text NOT NULL,
        PRIMARY KEY(user_id)
    );
    """


CREATE_LAST_RESET_DATE_INDEX = """
    CREATE INDEX IF NOT EXISTS user_tokens_last_reset_date
        ON user_tokens (last_reset_date);
    """


SELECT_QUOTA_PG = f"""
    SELECT {RECORD_COLUMNS}
      FROM user_tokens
     WHERE user_id=%s LIMIT 1
    """


SELECT_QUOTA_SQLITE = f"""
    SELECT {RECORD_COLUMNS}
      FROM user_tokens
     WHERE user_id=? LIMIT 1
    """


INIT_QUOTA_PG = """
    INSERT INTO user_tokens
           (user_id, tokens_available, tokens_used, last_reset_date, created_at, updated_at)
    VALUES (%s, %s, 0, %s, NOW(), NOW())
    ON CONFLICT (user_id) DO NOTHING
    """


INIT_QUOTA_SQLITE = """
    INSERT INTO user_tokens
           (user_id, tokens_available, tokens_used, last_reset_date, created_at, updated_at)
    VALUES (?, ?, 0, ?, datetime('now'), datetime('now'))
    ON CONFLICT (user_id) DO NOTHING
    """


COMPARE_AND_RESET_QUOTA_PG = f"""
    UPDATE user_tokens
       SET tokens_available=%s, tokens_used=0, last_reset_date=%s, updated_at=NOW()
     WHERE user_id=%s
       AND last_reset_date=%s
       AND last_reset_date < %s
    RETURNING {RECORD_COLUMNS}
    """


COMPARE_AND_RESET_QUOTA_SQLITE = f"""
    UPDATE user_tokens
       SET tokens_available=?, tokens_used=0, last_reset_date=?, updated_at=datetime('now')
     WHERE user_id=?
       AND last_reset_date=?
       AND last_reset_date < ?
    RETURNING {RECORD_COLUMNS}
    """


LIST_STALE_PG = """
    SELECT user_id
      FROM user_tokens
     WHERE last_reset_date <> %s
     ORDER BY user_id
     LIMIT %s
    """


LIST_STALE_SQLITE = """
    SELECT user_id
      FROM user_tokens
     WHERE last_reset_date <> ?
     ORDER BY user_id
     LIMIT ?
    """


LIST_STALE_AFTER_PG = """
    SELECT user_id
      FROM user_tokens
     WHERE last_reset_date <> %s
       AND user_id > %s
     ORDER BY user_id
     LIMIT %s
    """


LIST_STALE_AFTER_SQLITE = """
    SELECT user_id
      FROM user_tokens
     WHERE last_reset_date <> ?
       AND user_id > ?
     ORDER BY user_id
     LIMIT ?
    """


BULK_RESET_QUOTA_PG = """
    UPDATE user_tokens
       SET tokens_available=%s, tokens_used=0, last_reset_date=%s, updated_at=NOW()
     WHERE last_reset_date < %s
       AND user_id = ANY(%s)
    """


# placeholders for user IDs are generated for each chunk
BULK_RESET_QUOTA_SQLITE = """
    UPDATE user_tokens
       SET tokens_available=?, tokens_used=0, last_reset_date=?, updated_at=datetime('now')
     WHERE last_reset_date < ?
       AND user_id IN ({placeholders})
    """
