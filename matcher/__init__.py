import logging
import os

from flask import Flask
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_talisman import Talisman

from db_helpers import database_uri, engine_options

# Configure application
app = Flask(__name__)
app.logger.setLevel(logging.INFO)

# Trigger SSLify via Talisman if the app is running on Heroku
if 'DYNO' in os.environ:

    csp = {
        'default-src': [
            '\'self\'',
            '\'unsafe-inline\'',
            'cdn.jsdelivr.net',
            'nominatim.openstreetmap.org'
        ]
    }
    Talisman(app, content_security_policy=csp)

CORS(app)

app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
uri = database_uri()
app.config['SQLALCHEMY_DATABASE_URI'] = uri
app.config['SQLALCHEMY_ENGINE_OPTIONS'] = engine_options(uri)
app.config['PORT'] = int(os.getenv("PORT", 4000))
app.config['NGO_CACHE_PATH'] = os.getenv("NGO_CACHE_PATH", os.path.join(app.instance_path, "ngos.json"))
db = SQLAlchemy(app)

from matcher.cache import NgoRegistry

app.extensions['ngo_registry'] = NgoRegistry(db, app.config['NGO_CACHE_PATH'])

from matcher import routes, models

with app.app_context():
    db.create_all()
