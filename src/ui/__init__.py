"""NiceGUI interface - thin presentation layer for uploads and questions.

Responsibilities:
    - File selection and upload progress for .txt / .pdf material
    - Active-document selection
    - Question / answer transcript

Contains no business logic. Delegates all operations to the assistant
service, with the document list kept in NiceGUI user storage.
"""
