from datetime import date, datetime, timezone
from typing import List

from .extensions import db


class DrawHistory(db.Model):
    __tablename__ = "draw_history"

    id = db.Column(db.Integer, primary_key=True)
    game = db.Column(db.String(20), nullable=False, index=True)
    draw_date = db.Column(db.Date, nullable=True, index=True)
    numbers = db.Column(db.String(100), nullable=False)  # e.g. "1,2,3,4,5,6"
    bonus = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def numbers_list(self) -> List[int]:
        return [int(x) for x in self.numbers.split(",") if x]

    def as_dict(self):
        return {
            "id": self.id,
            "game": self.game,
            "draw_date": self.draw_date.isoformat() if isinstance(self.draw_date, date) else None,
            "numbers": self.numbers_list(),
            "bonus": self.bonus,
        }
