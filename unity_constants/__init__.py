"""
Unity Constants Generator — typed C# constants from Unity project metadata.
"""

__version__ = "0.1.0"
