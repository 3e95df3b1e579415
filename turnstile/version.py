__version__ = "0.1.0"
__homepage__ = "https://pypi.org/project/cf-turnstile/"
