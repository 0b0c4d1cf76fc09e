"""
Services - credential verification, ownership guard and gap scoring.
"""
