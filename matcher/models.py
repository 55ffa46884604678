from matcher import db


class Ngo(db.Model):
    __tablename__ = "ngos"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    contact_person = db.Column(db.String(255))
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20))
    address = db.Column(db.Text)
    needs = db.Column(db.Text)
    lat = db.Column(db.Numeric(10, 8), nullable=False)
    lon = db.Column(db.Numeric(11, 8), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())


class FoodDonation(db.Model):
    __tablename__ = "donations"
    id = db.Column(db.Integer, primary_key=True)
    ngo_id = db.Column(db.Integer, db.ForeignKey('ngos.id'))
    donor_name = db.Column(db.String(255), nullable=False)
    donor_email = db.Column(db.String(255), nullable=False)
    donor_phone = db.Column(db.String(20))
    donor_type = db.Column(db.String(100))
    food_description = db.Column(db.Text)
    quantity = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, server_default=db.func.now())
