from sqlalchemy import text
from qr_library.extensions import db

# Rejects any write that would leave a book with a negative quantity.
# The ORM CHECK constraint covers fresh schemas; this also guards tables
# created before the constraint existed.
TRIGGER_SQL = r"""
IF OBJECT_ID(N'dbo.trg_books_quantity_guard', N'TR') IS NULL
   AND OBJECT_ID(N'dbo.books', N'U') IS NOT NULL
BEGIN
    EXEC('
    CREATE TRIGGER dbo.trg_books_quantity_guard
    ON dbo.books
    AFTER INSERT, UPDATE
    AS
    BEGIN
        SET NOCOUNT ON;

        IF EXISTS (SELECT 1 FROM inserted WHERE quantity < 0)
        BEGIN
            RAISERROR(''Book quantity cannot be negative'', 16, 1);
            ROLLBACK TRANSACTION;
            RETURN;
        END
    END
    ')
END
"""


def ensure_db_objects_mssql(app):
    """No-op unless the configured engine is SQL Server."""
    with app.app_context():
        if db.engine.dialect.name != "mssql":
            return

        conn = db.engine.connect()
        trans = conn.begin()
        try:
            conn.execute(text(TRIGGER_SQL))
            trans.commit()
            app.logger.info("[db_objects_mssql] Quantity guard trigger ensured.")
        except Exception as e:
            trans.rollback()
            app.logger.error(f"[db_objects_mssql] ERROR: {e}")
            raise
        finally:
            conn.close()
