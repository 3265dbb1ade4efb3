"""
Adaptadores de Firebase (Auth + Firestore) para el sync de usuarios.
"""
