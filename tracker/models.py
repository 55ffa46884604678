from tracker import db


class Donation(db.Model):
    __tablename__ = "donations"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    message = db.Column(db.Text, nullable=False)
    utr = db.Column(db.String(50), unique=True)
    timestamp = db.Column(db.DateTime, server_default=db.func.now())

    def to_dict(self):
        return {
            'name': self.name,
            'amount': float(self.amount),
            'message': self.message,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }
