"""
Storefront GraphQL documents for bundle metaobjects.
"""

_PRODUCT_FIELDS = """
            id
            handle
            title
            featuredImage {
              url
              altText
            }
            variants(first: 1) {
              nodes {
                id
                availableForSale
                title
              }
            }
            priceRange {
              minVariantPrice {
                amount
                currencyCode
              }
            }
"""

BUNDLE_BY_HANDLE_QUERY = """
  query BundleByHandle($handle: String!) {
    metaobject(handle: {handle: $handle, type: "bundle"}) {
      id
      handle
      fields {
        key
        value
        type
        reference {
          __typename
          ... on Product {%(product_fields)s
          }
          ... on MediaImage {
            id
            image {
              url
              altText
            }
          }
          ... on GenericFile {
            id
            url
            alt
          }
        }
        references(first: 20) {
          nodes {
            __typename
            ... on Product {%(product_fields)s
            }
          }
        }
      }
    }
  }
""" % {"product_fields": _PRODUCT_FIELDS}

BUNDLES_QUERY = """
  query Bundles($first: Int!) {
    metaobjects(type: "bundle", first: $first) {
      nodes {
        id
        handle
        fields {
          key
          value
          type
          reference {
            __typename
            ... on MediaImage {
              image {
                url
                altText
              }
            }
            ... on GenericFile {
              url
              alt
            }
          }
        }
      }
    }
  }
"""
