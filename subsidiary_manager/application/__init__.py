"""
Application layer - Use cases, DTOs, security helpers and bootstrap.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate the stores
3. Hashing passwords and seeding the default administrator
"""
