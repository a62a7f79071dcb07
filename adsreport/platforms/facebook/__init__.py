"""
Facebook Ads platform implementation.

Key Components:
- constants: Graph API version, endpoints and error codes
- fields: Field lists per Graph endpoint (facebook-business SDK Field objects)
- client: FacebookGraphClient, typed access to the Graph endpoints
- joiner: Resolves insights against their parent campaigns and ad sets
- processor: RowNormalizer, joined records to canonical report rows
- pipeline: InsightsPipeline, fetch -> join -> normalize for one account

Facebook API Specifics:
- Graph API Version: v18.0 (configurable)
- Cursor pagination through paging.next
- Actions/action_values arrays requiring flattening
"""
