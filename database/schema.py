"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    tables = [
        'reservations',
        'unavailable_dates',
        'admins',
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')


def create_tables(db):
    """Create all database tables that do not exist yet."""

    # 1. Reservations
    # has_parking / has_elevator are added by migrations so that databases
    # created before those fields existed converge on the same shape.
    db.execute('''
        CREATE TABLE IF NOT EXISTS reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_name TEXT NOT NULL,
            customer_email TEXT NOT NULL,
            customer_phone TEXT NOT NULL,
            customer_postal_code TEXT,
            customer_address TEXT NOT NULL,
            reservation_date TEXT NOT NULL,
            reservation_time TEXT NOT NULL,
            item_category TEXT NOT NULL,
            item_description TEXT,
            estimated_quantity INTEGER,
            status TEXT NOT NULL DEFAULT 'pending',
            notes TEXT,
            customer_notes TEXT,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 2. Admin credentials
    db.execute('''
        CREATE TABLE IF NOT EXISTS admins (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 3. Blackout dates
    db.execute('''
        CREATE TABLE IF NOT EXISTS unavailable_dates (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            date TEXT UNIQUE NOT NULL,
            reason TEXT,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create performance indexes."""

    # Reservation indexes
    db.execute('CREATE INDEX IF NOT EXISTS idx_reservation_date ON reservations(reservation_date)')
    db.execute('CREATE INDEX IF NOT EXISTS idx_customer_email ON reservations(customer_email)')
    db.execute('CREATE INDEX IF NOT EXISTS idx_status ON reservations(status)')
    db.execute('CREATE INDEX IF NOT EXISTS idx_created_at ON reservations(created_at)')

    # Blackout date index
    db.execute('CREATE INDEX IF NOT EXISTS idx_unavailable_dates ON unavailable_dates(date)')
