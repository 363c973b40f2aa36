"""Application layer - Use cases, execution and port definitions.

This layer contains:
- Executor: TransactionalExecutor, the lock + transaction wrapper every
  use case runs through
- Exceptions: Execution-layer failure kinds (lock timeout, lock state, invocation)
- Ports: Abstract interfaces (ABCs) for external dependencies
- Use Cases: Application-specific business rules and orchestration

The application layer depends only on the domain layer.
Infrastructure implementations are injected via ports.
"""
