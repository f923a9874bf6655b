"""Firestore collection names.

Firestore creates collections on first write, so these constants are the only
record of which collections the application uses.
"""

COLLECTION_USERS = "users"
COLLECTION_INTERVIEWS = "interviews"
COLLECTION_REUNIONES = "reuniones"
COLLECTION_SACRAMENT_MEETINGS = "sacramentMeetings"
COLLECTION_BISHOPRIC_MEETINGS = "bishopricMeetings"
COLLECTION_LOGS = "logs"

# bishopricMeetings/{meetingId}/notes
SUBCOLLECTION_NOTES = "notes"
