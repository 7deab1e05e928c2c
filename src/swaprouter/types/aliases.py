type BlockHash = str
type ChainId = int
type Deadline = int | str
type Fee = int
type Liquidity = int
type Tick = int
