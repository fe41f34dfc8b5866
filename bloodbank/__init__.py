"""Django project package for the blood donation doctor backend."""
