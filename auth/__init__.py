"""auth/ -- Authentication and authorization package for the Quora API.

Password hashing, session tokens, user/session persistence, the auth
service and the owner-or-admin guard.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/ or qa/.
api/ and qa/ import from auth/, not the other way around.
"""
