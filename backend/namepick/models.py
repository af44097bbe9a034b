from namepick import db
import json


class StoredParticipant(db.Model):
    __tablename__ = 'stored_participant'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, unique=True, nullable=False, index=True)
    picks = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded list of names

    def get_picks(self):
        try:
            return list(json.loads(self.picks or '[]'))
        except ValueError:
            return []

    def set_picks(self, picks):
        self.picks = json.dumps(list(picks))

    def to_dict(self):
        return {
            'name': self.name,
            'picks': self.get_picks(),
        }
