import sqlite3
import tempfile
from pathlib import Path

from dbsampler import sample_database

with tempfile.TemporaryDirectory() as tmp:
    db_path = Path(tmp) / "company.db"
    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE employees (id INTEGER, name TEXT, manager TEXT)")
    conn.executemany(
        "INSERT INTO employees VALUES (?, ?, ?)",
        [(1, "Alice", None), (2, "Bob", "Alice"), (3, "Charlie", "")],
    )
    conn.commit()
    conn.close()

    results = sample_database(f"sqlite:///{db_path}", 100)

for table, result in results.items():
    print(f"{table} ({result.sampling}, {result.nb_row} rows)")
    for name, values in result.as_dict().items():
        print(f"  {name}: {values}")
