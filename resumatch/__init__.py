"""
resumatch - resume and job matching with semantic ranking and ATS analysis.
"""

__app_name__ = "resumatch"
__version__ = "0.1.0"
