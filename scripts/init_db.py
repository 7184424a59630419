import os
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import inspect

from lotto_research import create_app
from lotto_research.extensions import db
from lotto_research.models import DrawHistory


def main() -> None:
    # create_app creates tables and seeds history when SEED_HISTORY is on
    app = create_app()
    os.makedirs(app.instance_path, exist_ok=True)
    with app.app_context():
        tables_created = inspect(db.engine).get_table_names()
        print(f"Database initialized at: {app.config['SQLALCHEMY_DATABASE_URI']}")
        print(f"Tables created: {', '.join(tables_created)}")
        print(f"Stored draws: {DrawHistory.query.count()}")


if __name__ == "__main__":
    main()
