# Shared helpers for the Sahara backend
