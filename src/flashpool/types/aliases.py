type BlockNumber = int
type Denom = str
type StorageKey = str
