"""Note parsing, aggregation and the batch driver."""
