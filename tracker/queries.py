from db_helpers import query_db
from tracker import db
from tracker.models import Donation


def recent_donations(limit=10):
    """ Return the newest donations first. """

    rows = (Donation.query
            .order_by(Donation.timestamp.desc(), Donation.id.desc())
            .limit(limit)
            .all())

    return [row.to_dict() for row in rows]


def donation_totals():
    """ Return the running total amount and the number of donations (rows, not distinct names). """

    query = """SELECT COALESCE(SUM(amount), 0) AS total, COUNT(id) AS donor_count
    FROM donations"""

    result = query_db(db, query, one=True)

    return {'total': float(result['total']), 'donorCount': int(result['donor_count'])}


def top_donors(limit=5):
    """ Return the biggest contributors by summed amount, grouped by name.

    Equal totals keep the order in which each name first donated.
    """

    query = """SELECT name, SUM(amount) AS total_donated
    FROM donations
    GROUP BY name
    ORDER BY total_donated DESC, MIN(id) ASC LIMIT :limit"""

    results = query_db(db, query, {'limit': limit})

    return [{'name': row['name'], 'totalDonated': float(row['total_donated'])} for row in results]
