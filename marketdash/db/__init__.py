# marketdash/db/__init__.py
