"""
Airflow DAGs Package

DAGs:
- daily_property_sync: ATTOM foreclosure sync with Street View imagery (2:00 AM)
"""
