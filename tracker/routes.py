from decimal import Decimal, InvalidOperation

from flask import jsonify, request
from sqlalchemy.exc import IntegrityError

from db_helpers import is_unique_violation
from helpers import apology, missing_fields
from tracker import app, db
from tracker.live import viewers
from tracker.models import Donation
from tracker.queries import donation_totals, recent_donations, top_donors


@app.after_request
def after_request(response):
    """Ensure responses aren't cached"""
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    response.headers["Expires"] = 0
    response.headers["Pragma"] = "no-cache"
    return response


@app.route("/")
def index():
    return jsonify({"name": "Donation Tracker API", "status": "operational"})


@app.route("/api/donate", methods=["POST"])
def donate():
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict) or missing_fields(data, ["name", "amount", "message", "utr"]):
        return apology("All fields are required")

    try:
        amount = Decimal(str(data["amount"]))
    except InvalidOperation:
        return apology("Amount must be a positive number")
    if not amount.is_finite() or amount <= 0:
        return apology("Amount must be a positive number")

    donation = Donation(name=data["name"], amount=amount, message=data["message"], utr=data["utr"])

    try:
        db.session.add(donation)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        if is_unique_violation(e, "utr"):
            return apology("This UTR has already been submitted.", 409)
        app.logger.exception("Failed to record donation")
        return apology("Server error", 500)
    except Exception:
        db.session.rollback()
        app.logger.exception("Failed to record donation")
        return apology("Server error", 500)

    try:
        totals = donation_totals()
        payload = {
            "newDonation": {"name": donation.name, "amount": float(amount), "message": donation.message},
            "total": totals["total"],
            "donorCount": totals["donorCount"],
            "topDonors": top_donors(),
        }
        viewers().broadcast({"type": "NEW_DONATION", "payload": payload})
    except Exception:
        app.logger.exception("Failed to recompute totals after donation")
        return apology("Server error", 500)

    return jsonify({"success": True, "message": "Donation acknowledged!"})


@app.route("/api/donations")
def donations():
    try:
        return jsonify(recent_donations())
    except Exception:
        app.logger.exception("Failed to load recent donations")
        return apology("Server error", 500)


@app.route("/api/stats")
def stats():
    try:
        return jsonify(donation_totals())
    except Exception:
        app.logger.exception("Failed to load donation totals")
        return apology("Server error", 500)


@app.route("/api/top-donors")
def top_donors_list():
    try:
        return jsonify(top_donors())
    except Exception:
        app.logger.exception("Failed to load top donors")
        return apology("Server error", 500)
