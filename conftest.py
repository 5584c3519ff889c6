""" Puts the project root on the path under pytest, so tests can import `example` from a checkout. """
