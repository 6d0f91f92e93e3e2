"""Shared schema fixtures."""

import pytest

LIBRARY_SDL = """
scalar Date

enum Role {
  ADMIN
  MEMBER
}

type User {
  id: ID!
  name: String
  age: Int
  date_of_birth: Date
  role: Role!
  friends: [User!]!
  tags: [String]
  scores: [Float!]
  matrix: [[Int]]
  manager: User
}

input AddressInput {
  street: String!
  zip: String
}

input UserInput {
  name: String!
  tags: [String!]
  role: Role
  address: AddressInput
  active: Boolean
}

type Query {
  user(id: ID!): User
  users: [User!]!
}

type Mutation {
  addUser(input: UserInput!): User!
}
"""


@pytest.fixture
def library_sdl():
    return LIBRARY_SDL
