"""
Contact mailer service for Gonzaga Professional Builders.

A Flask API that validates contact-form submissions and sends a
confirmation email to the client and a notification email to the
administrator through Resend.
"""

__version__ = "1.0.0"
__author__ = "Gonzaga Professional Builders"
