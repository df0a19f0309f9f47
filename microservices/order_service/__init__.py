"""Order microservice: transactional order creation, order queries and status changes."""
