# marketdash/utils/__init__.py
