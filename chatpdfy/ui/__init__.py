"""NiceGUI interface - thin visualization layer for the conversation.

Responsibilities:
    - Message list rendered from the turn presenter
    - File-summary cards for uploaded PDFs
    - Pending indicator while a reply is awaited
    - PDF upload, message input and clear controls

Contains no conversation logic. Delegates to the shared chat session.
"""
