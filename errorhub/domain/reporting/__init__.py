"""
Reporting bounded context, domain layer.

- Error catalog and definition parsing
- Three-tier resolution cascade
- Message formatting
- Ordered, failure-isolated handler dispatch
- Error simulation registry
"""
