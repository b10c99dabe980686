"""Domain layer for finreport application.

Services live in their own modules (``finreport.domain.account`` and so on);
they are not re-exported here so that the database layer can import domain
entities without pulling the services in.
"""
