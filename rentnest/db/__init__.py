"""
MongoDB access for the migration jobs.
"""
