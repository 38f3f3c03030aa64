import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "database.db"
LIMIT = int(sys.argv[2]) if len(sys.argv) > 2 else 10

conn = sqlite3.connect(DB)
cur = conn.cursor()

for table in ("users", "products"):
    try:
        cur.execute(f"SELECT COUNT(*) FROM {table}")
    except sqlite3.OperationalError as e:
        print(f"{table}: {e}")
        continue
    print(f"=== {table} ({cur.fetchone()[0]} rows) ===")

    if table == "users":
        cur.execute(
            "SELECT id, username, email, is_admin, created_at FROM users ORDER BY id DESC LIMIT ?",
            (LIMIT,),
        )
        for r in cur.fetchall():
            print({"id": r[0], "username": r[1], "email": r[2], "is_admin": r[3], "created_at": r[4]})
    else:
        cur.execute(
            "SELECT id, title, price, category, rating_rate, rating_count FROM products ORDER BY id DESC LIMIT ?",
            (LIMIT,),
        )
        for r in cur.fetchall():
            print(r)
    print()

conn.close()
