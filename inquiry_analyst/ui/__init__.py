"""NiceGUI interface - thin visualization layer for the analysis workflow.

Responsibilities:
    - PDF upload and extracted-text review
    - Streaming display of the analysis and follow-up answers
    - Follow-up messages with optional attached PDF
    - Copy action on finished answers

Contains minimal business logic. Delegates all operations to the API.
"""
