"""HTTP surface receiving GitHub webhook deliveries."""
