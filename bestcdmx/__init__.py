"""
Best CDMX: a bilingual restaurant directory for Mexico City.
"""
