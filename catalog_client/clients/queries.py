"""GraphQL documents for the catalog read operations."""

SEARCH_QUERY = """
query search($input: SearchInput!) {
  search(input: $input) {
    start
    count
    total
    searchResults {
      entity {
        urn
        type
        ... on Dataset {
          name
          description
          platform {
            name
          }
          ownership {
            owners {
              owner {
                ... on CorpUser {
                  urn
                  username
                }
                ... on CorpGroup {
                  urn
                  name
                }
              }
              type
            }
          }
          tags {
            tags {
              tag {
                urn
                name
                description
              }
            }
          }
          domain {
            domain {
              urn
              properties {
                name
                description
              }
            }
          }
        }
        ... on Dashboard {
          dashboardId
          info {
            name
            description
          }
          platform {
            name
          }
        }
        ... on DataFlow {
          flowId
          info {
            name
            description
          }
          platform {
            name
          }
        }
        ... on DataProduct {
          properties {
            name
            description
          }
        }
        ... on GlossaryTerm {
          properties {
            name
            description
          }
        }
        ... on Tag {
          properties {
            name
            description
          }
        }
      }
      matchedFields {
        name
        value
      }
    }
  }
}
"""


GET_ENTITY_QUERY = """
query getEntity($urn: String!) {
  entity(urn: $urn) {
    urn
    type
    ... on Dataset {
      name
      description
      platform {
        name
      }
      ownership {
        owners {
          owner {
            ... on CorpUser {
              urn
              username
              info {
                displayName
                email
              }
            }
            ... on CorpGroup {
              urn
              name
            }
          }
          type
        }
      }
      tags {
        tags {
          tag {
            urn
            name
            description
          }
        }
      }
      glossaryTerms {
        terms {
          term {
            urn
            properties {
              name
              description
            }
          }
        }
      }
      domain {
        domain {
          urn
          properties {
            name
            description
          }
        }
      }
      deprecation {
        deprecated
        note
        actor
        decommissionTime
      }
      properties {
        name
        description
        customProperties {
          key
          value
        }
      }
      subTypes {
        typeNames
      }
    }
    ... on Dashboard {
      dashboardId
      info {
        name
        description
        externalUrl
      }
      platform {
        name
      }
      ownership {
        owners {
          owner {
            ... on CorpUser {
              urn
              username
            }
          }
          type
        }
      }
    }
  }
}
"""


GET_SCHEMA_QUERY = """
query getSchema($urn: String!) {
  dataset(urn: $urn) {
    schemaMetadata {
      name
      platformSchema {
        ... on TableSchema {
          schema
        }
      }
      version
      hash
      fields {
        fieldPath
        type
        nativeDataType
        description
        nullable
        isPartOfKey
        tags {
          tags {
            tag {
              urn
              name
            }
          }
        }
        glossaryTerms {
          terms {
            term {
              urn
              name
            }
          }
        }
      }
      primaryKeys
      foreignKeys {
        name
        sourceFields {
          fieldPath
        }
        foreignDataset {
          urn
        }
        foreignFields {
          fieldPath
        }
      }
    }
  }
}
"""


# searchAcrossLineage no longer accepts maxHops; depth is filtered client-side
# from the returned degree values.
GET_LINEAGE_QUERY = """
query getLineage($urn: String!, $direction: LineageDirection!) {
  searchAcrossLineage(
    input: {
      urn: $urn
      direction: $direction
    }
  ) {
    searchResults {
      entity {
        urn
        type
        ... on Dataset {
          name
          platform {
            name
          }
          description
        }
        ... on DataJob {
          jobId
          info {
            name
          }
          dataFlow {
            urn
            flowId
          }
        }
      }
      degree
      paths {
        path {
          urn
        }
      }
    }
  }
}
"""


GET_QUERIES_QUERY = """
query getQueries($urn: String!) {
  dataset(urn: $urn) {
    usageStats {
      buckets {
        bucket
        duration
        metrics {
          topSqlQueries
        }
      }
    }
  }
}
"""


GET_GLOSSARY_TERM_QUERY = """
query getGlossaryTerm($urn: String!) {
  glossaryTerm(urn: $urn) {
    urn
    name
    hierarchicalName
    properties {
      name
      description
      customProperties {
        key
        value
      }
    }
    parentNodes {
      nodes {
        urn
        properties {
          name
        }
      }
    }
    ownership {
      owners {
        owner {
          ... on CorpUser {
            urn
            username
          }
        }
        type
      }
    }
  }
}
"""


LIST_TAGS_QUERY = """
query listTags($input: SearchInput!) {
  search(input: $input) {
    total
    searchResults {
      entity {
        ... on Tag {
          urn
          name
          description
          properties {
            name
            description
          }
        }
      }
    }
  }
}
"""


LIST_DOMAINS_QUERY = """
query listDomains {
  listDomains(input: {start: 0, count: 100}) {
    total
    domains {
      urn
      properties {
        name
        description
      }
      ownership {
        owners {
          owner {
            ... on CorpUser {
              urn
              username
            }
          }
          type
        }
      }
      entities(input: {start: 0, count: 0}) {
        total
      }
    }
  }
}
"""


PING_QUERY = """
query ping {
  __typename
}
"""


LIST_DATA_PRODUCTS_QUERY = """
query listDataProducts {
  listDataProducts(input: {start: 0, count: 100}) {
    total
    dataProducts {
      urn
      properties {
        name
        description
        customProperties {
          key
          value
        }
      }
      domain {
        domain {
          urn
          properties {
            name
          }
        }
      }
      ownership {
        owners {
          owner {
            ... on CorpUser {
              urn
              username
            }
            ... on CorpGroup {
              urn
              name
            }
          }
          type
        }
      }
    }
  }
}
"""


GET_DATA_PRODUCT_QUERY = """
query getDataProduct($urn: String!) {
  dataProduct(urn: $urn) {
    urn
    properties {
      name
      description
      customProperties {
        key
        value
      }
    }
    domain {
      domain {
        urn
        properties {
          name
          description
        }
      }
    }
    ownership {
      owners {
        owner {
          ... on CorpUser {
            urn
            username
            info {
              displayName
              email
            }
          }
          ... on CorpGroup {
            urn
            name
          }
        }
        type
      }
    }
  }
}
"""


GET_COLUMN_LINEAGE_QUERY = """
query getColumnLineage($urn: String!) {
  dataset(urn: $urn) {
    fineGrainedLineages {
      upstreams {
        path
        dataset
      }
      downstreams {
        path
      }
      transformOperation
      confidenceScore
      query
    }
  }
}
"""


BATCH_GET_SCHEMAS_QUERY = """
query batchGetSchemas($urns: [String!]!) {
  entities(urns: $urns) {
    ... on Dataset {
      urn
      schemaMetadata {
        name
        platformSchema {
          ... on TableSchema {
            schema
          }
        }
        version
        hash
        fields {
          fieldPath
          type
          nativeDataType
          description
          nullable
          isPartOfKey
          tags {
            tags {
              tag {
                urn
                name
              }
            }
          }
          glossaryTerms {
            terms {
              term {
                urn
                name
              }
            }
          }
        }
        primaryKeys
        foreignKeys {
          name
          sourceFields {
            fieldPath
          }
          foreignDataset {
            urn
          }
          foreignFields {
            fieldPath
          }
        }
      }
    }
  }
}
"""
