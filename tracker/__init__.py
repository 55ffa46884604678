import logging
import os

from flask import Flask
from flask_cors import CORS
from flask_sock import Sock
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
            'cdn.jsdelivr.net'
        ]
    }
    Talisman(app, content_security_policy=csp)

# The static client may be served from another origin
CORS(app)

app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
uri = database_uri()
app.config['SQLALCHEMY_DATABASE_URI'] = uri
app.config['SQLALCHEMY_ENGINE_OPTIONS'] = engine_options(uri)
app.config['PORT'] = int(os.getenv("PORT", 3001))
db = SQLAlchemy(app)

# Live updates are pushed over a plain WebSocket at /api/ws
sock = Sock(app)

from tracker.live import ViewerRegistry

app.extensions['viewers'] = ViewerRegistry()

from tracker import routes, models, live

with app.app_context():
    db.create_all()
