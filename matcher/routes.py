import requests
from flask import jsonify, request

from helpers import apology, missing_fields, parse_coordinates, reverse_geocode
from matcher import app, db
from matcher.models import FoodDonation, Ngo


def registry():
    return app.extensions['ngo_registry']


@app.after_request
def after_request(response):
    """Ensure responses aren't cached"""
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    response.headers["Expires"] = 0
    response.headers["Pragma"] = "no-cache"
    return response


@app.route("/")
def index():
    return jsonify({"name": "Help Hunger API", "status": "operational"})


# Register a new NGO
@app.route("/api/ngos", methods=["POST"])
def register_ngo():
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict) or missing_fields(data, ["name", "email", "lat", "lon"]):
        return apology("Name, email, and location are required fields.")

    try:
        lat, lon = parse_coordinates(data["lat"], data["lon"])
    except (TypeError, ValueError):
        return apology("Latitude and longitude must be numeric.")

    ngo = Ngo(
        name=data["name"],
        contact_person=data.get("contact_person"),
        email=data["email"],
        phone=data.get("phone"),
        address=data.get("address"),
        needs=data.get("needs"),
        lat=lat,
        lon=lon
    )

    try:
        db.session.add(ngo)
        db.session.commit()
        ngo_id = ngo.id
        registry().refresh()
    except Exception:
        db.session.rollback()
        app.logger.exception("Failed to register NGO")
        return apology("Server error while registering NGO.", 500)

    app.logger.info("Registered NGO %s, registry cache rebuilt", ngo_id)
    return jsonify({"success": True, "message": "NGO registered successfully!", "id": ngo_id}), 201


# Find nearby NGOs
@app.route("/api/ngos/nearby")
def nearby_ngos():
    lat = request.args.get("lat")
    lon = request.args.get("lon")
    if not lat or not lon:
        return apology("Latitude and longitude are required.")

    try:
        lat, lon = parse_coordinates(lat, lon)
    except ValueError:
        return apology("Latitude and longitude must be numeric.")

    try:
        return jsonify(registry().nearby(lat, lon))
    except Exception:
        app.logger.exception("Failed to find nearby NGOs")
        return apology("Server error while finding nearby NGOs.", 500)


# Submit a new food donation
@app.route("/api/donations", methods=["POST"])
def submit_donation():
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict) or missing_fields(data, ["ngo_id", "donor_name", "donor_email"]):
        return apology("NGO selection, donor name, and email are required.")

    donation = FoodDonation(
        ngo_id=data["ngo_id"],
        donor_name=data["donor_name"],
        donor_email=data["donor_email"],
        donor_phone=data.get("donor_phone"),
        donor_type=data.get("donor_type"),
        food_description=data.get("food_description"),
        quantity=data.get("quantity")
    )

    try:
        db.session.add(donation)
        db.session.commit()
    except Exception:
        db.session.rollback()
        app.logger.exception("Failed to record donation")
        return apology("Server error while recording donation.", 500)

    # TODO: send the NGO an email once a mail provider is chosen
    app.logger.info("Donation received for NGO ID %s from %s. An email notification should be sent.",
                    donation.ngo_id, donation.donor_email)

    return jsonify({"success": True, "message": "Donation details recorded successfully."}), 201


@app.route("/api/geocode/reverse")
def reverse_geocode_lookup():
    lat = request.args.get("lat")
    lon = request.args.get("lon")
    if not lat or not lon:
        return apology("Latitude and longitude are required.")

    try:
        lat, lon = parse_coordinates(lat, lon)
    except ValueError:
        return apology("Latitude and longitude must be numeric.")

    try:
        address = reverse_geocode(lat, lon)
    except requests.exceptions.RequestException:
        app.logger.exception("Reverse geocoding failed for %s, %s", lat, lon)
        return apology("Reverse geocoding failed.", 502)

    return jsonify({"address": address})
